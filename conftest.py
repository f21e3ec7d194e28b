"""
Pytest configuration file.

This file is automatically loaded by pytest. It ensures the project root is
on the Python path so the ``cainiao_mail`` package imports without installation.
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))
