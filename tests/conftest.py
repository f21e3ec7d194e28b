"""Shared fixtures for the test suite."""
from typing import List

import pandas as pd
import pytest

from cainiao_mail.config import Settings
from cainiao_mail.core.models import SourceTable


def make_table(name: str, headers: List[str], rows: List[List[str]]) -> SourceTable:
    """Build a SourceTable from a header row and positional rows."""
    return SourceTable(
        name=name,
        headers=list(headers),
        rows=[dict(zip(headers, row)) for row in rows],
    )


@pytest.fixture
def build_table():
    """Fixture exposing the table builder to test modules."""
    return make_table


@pytest.fixture
def settings():
    """
    Fixture providing a fresh Settings instance.

    Returns:
        Settings: default settings, independent of the module singleton
    """
    return Settings()


@pytest.fixture
def table_a():
    """Report with the standard column names and one accepted row."""
    return make_table(
        "a.xlsx",
        ["邮件号", "收寄机构", "签收方式", "反馈情况", "投递员"],
        [["1300000031", "长安揽投部", "本人签收", "", "张三"]],
    )


@pytest.fixture
def table_b():
    """Report with alternative column names and one excluded row."""
    return make_table(
        "b.xlsx",
        ["运单", "收寄局", "投递方式", "反馈"],
        [["1300000034", "康巴什蒙欣", "本人", "妥投"]],
    )


@pytest.fixture
def report_frame():
    """
    Fixture providing a DataFrame shaped like a delivery report.

    Returns:
        pandas.DataFrame: rows covering accepted, excluded and out-of-scope mail
    """
    return pd.DataFrame({
        "邮件号": ["1300000016", "1300000031", "1400000016", "1300000032", "1300000034"],
        "收件人地址": ["长安路1号", "长安路2号", "长安路3号", "长安路4号", "长安路5号"],
        "邮件接收时间": ["2024-05-01 09:00"] * 5,
        "投递员": ["张三", "李四", "张三", "张三", ""],
        "签收方式": ["丰巢", "本人签收", "本人签收", "他人代收", "物业"],
        "反馈情况": ["妥投", "", "妥投", "已退回", "妥投"],
        "收寄机构": ["长安揽投部", "长安揽投部", "长安揽投部", "正意揽投部", "长安揽投部"],
    })
