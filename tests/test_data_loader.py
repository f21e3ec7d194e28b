import pandas as pd
import pytest

from cainiao_mail.services.data_loader import DataLoaderService


@pytest.fixture
def loader(settings):
    return DataLoaderService(settings)


class TestLoadExcel:
    """
    Tests for reading Excel reports.
    """

    def test_load_xlsx_as_text(self, loader, report_frame, tmp_path):
        path = tmp_path / "report.xlsx"
        report_frame.to_excel(path, index=False)

        table = loader.load(path)

        assert table.name == "report.xlsx"
        assert table.headers == list(report_frame.columns)
        assert len(table) == 5
        assert table.rows[0]["邮件号"] == "1300000016"
        assert table.rows[4]["投递员"] == ""

    def test_numeric_tracking_numbers_keep_all_digits(self, loader, tmp_path):
        path = tmp_path / "numeric.xlsx"
        pd.DataFrame({"邮件号": [1300000000031, 1300000000016], "收寄机构": ["长安", None]}).to_excel(
            path, index=False
        )

        table = loader.load(path)

        assert [row["邮件号"] for row in table.rows] == ["1300000000031", "1300000000016"]
        assert table.rows[1]["收寄机构"] == ""

    def test_only_first_sheet_is_read(self, loader, tmp_path):
        path = tmp_path / "sheets.xlsx"
        with pd.ExcelWriter(path) as writer:
            pd.DataFrame({"邮件号": ["1300000016"]}).to_excel(writer, sheet_name="first", index=False)
            pd.DataFrame({"其他": ["x", "y"]}).to_excel(writer, sheet_name="second", index=False)

        table = loader.load(path)

        assert table.headers == ["邮件号"]
        assert len(table) == 1

    def test_corrupt_file_raises_value_error(self, loader, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a workbook")

        with pytest.raises(ValueError):
            loader.load(path)


class TestLoadCsv:
    """
    Tests for reading CSV exports in different encodings.
    """

    @pytest.mark.parametrize("encoding", ["utf-8-sig", "gb18030"], ids=["utf8-bom", "gb18030"])
    def test_load_csv(self, loader, tmp_path, encoding):
        path = tmp_path / "report.csv"
        content = "邮件号,收寄机构,投递员\n1300000031,长安揽投部,张三\n1300000016,,李四\n"
        path.write_bytes(content.encode(encoding))

        table = loader.load(path)

        assert table.headers == ["邮件号", "收寄机构", "投递员"]
        assert table.rows[0]["投递员"] == "张三"
        assert table.rows[1]["收寄机构"] == ""

    def test_load_single_column_csv(self, loader, tmp_path):
        path = tmp_path / "numbers.csv"
        path.write_bytes("邮件号\n1300000016\n1300000031\n".encode("utf-8-sig"))

        table = loader.load(path)

        assert table.headers == ["邮件号"]
        assert [row["邮件号"] for row in table.rows] == ["1300000016", "1300000031"]


class TestLoadErrors:
    """
    Tests for file-level errors.
    """

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load(tmp_path / "missing.xlsx")

    def test_unsupported_extension(self, loader, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("邮件号")

        with pytest.raises(ValueError, match="Unsupported"):
            loader.load(path)


class TestDiscover:
    """
    Tests for input directory scanning.
    """

    def test_discover_sorted_and_skips_lock_files(self, loader, tmp_path):
        for name in ["b.xlsx", "a.csv", "~$a.xlsx", "readme.txt"]:
            (tmp_path / name).write_bytes(b"")

        assert [p.name for p in loader.discover(tmp_path)] == ["a.csv", "b.xlsx"]

    def test_discover_missing_directory(self, loader, tmp_path):
        assert loader.discover(tmp_path / "nope") == []
