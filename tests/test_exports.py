from datetime import datetime

import pandas as pd
import pytest
from docx import Document
from openpyxl import load_workbook

from cainiao_mail import main as cli
from cainiao_mail.core.models import CourierSummary, ProcessingResult
from cainiao_mail.reports import ReportGenerator, format_courier_detail, format_courier_summary, format_overview
from cainiao_mail.reports.docx_builder import DocxBuilder, percentage
from cainiao_mail.services.excel_formatter import ExcelFormatter
from cainiao_mail.services.pipeline import ProcessingPipeline


@pytest.fixture
def processed(settings, table_a, table_b, build_table):
    extra = build_table(
        "c.xlsx",
        ["邮件号", "收寄机构", "签收方式", "反馈情况", "投递员"],
        [
            ["1300000016", "长安揽投部", "丰巢", "妥投", "李四"],
            ["1300000032", "长安揽投部", "本人", "妥投", "李四"],
        ],
    )
    return ProcessingPipeline(settings).process_tables([table_a, table_b, extra])


class TestExcelFormatter:
    """
    Tests for the formatted workbook writer.
    """

    def test_export_workbook_styles(self, tmp_path):
        path = tmp_path / "styled.xlsx"
        sheets = {
            "数据": pd.DataFrame({"邮件号": ["1300000000031"], "件数": [1]}),
            "统计": pd.DataFrame({"投递员": ["张三", "合计"], "件数": [2, 2]}),
        }

        assert ExcelFormatter().export_workbook(
            sheets, path, summary_identifier="合计", text_columns=["邮件号"]
        )

        wb = load_workbook(path)
        assert wb.sheetnames == ["数据", "统计"]

        data = wb["数据"]
        assert data["A2"].value == "1300000000031"
        assert data["A2"].number_format == "@"
        assert data["A1"].font.bold
        assert data.freeze_panes == "A2"

        summary = wb["统计"]
        assert summary["A3"].font.bold
        assert not summary["A2"].font.bold
        assert summary["B3"].value == 2

    def test_export_single_sheet(self, tmp_path):
        path = tmp_path / "single.xlsx"

        assert ExcelFormatter().export_workbook({"Sheet": pd.DataFrame({"a": ["x"]})}, path)
        assert load_workbook(path).sheetnames == ["Sheet"]

    def test_export_failure_returns_false(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")

        assert not ExcelFormatter().export_workbook(
            {"Sheet": pd.DataFrame({"a": [1]})}, blocker / "out.xlsx"
        )


class TestTextSummary:
    """
    Tests for the plain-text courier summaries.
    """

    def test_courier_summary_lines(self, processed):
        assert format_courier_summary(processed.stats) == "李四：2件\n张三：1件"

    def test_courier_detail(self):
        summary = CourierSummary(name="张三", count=2, tracking_numbers=["1300000016", "1300000031"])

        assert format_courier_detail(summary) == (
            "张三 - 需处理邮件 (2件):\n1300000016\n1300000031"
        )

    def test_overview_lists_counts(self, processed):
        text = format_overview(processed.stats)

        assert "总处理行数: 4" in text
        assert "已剔除机构: 1" in text
        assert "最终有效数据: 3" in text
        assert "驿站投递: 1" in text


class TestDocxBuilder:
    """
    Tests for the report table helpers.
    """

    @pytest.mark.parametrize(
        "part, whole, expected",
        [(1, 3, "33.3%"), (2, 2, "100.0%"), (0, 0, "0.0%"), (5, 0, "0.0%")],
        ids=["third", "all", "empty", "zero-total"],
    )
    def test_percentage(self, part, whole, expected):
        assert percentage(part, whole) == expected

    def test_share_and_ranking_tables(self, tmp_path):
        path = tmp_path / "tables.docx"
        builder = DocxBuilder()
        builder.add_title("标题", date=datetime(2024, 5, 1))
        builder.add_share_table([("按址投递", 1), ("驿站投递", 3)], total=4)
        builder.add_courier_ranking([
            CourierSummary(name="李四", count=2, tracking_numbers=["1300000016", "1300000032"]),
            CourierSummary(name="张三", count=1, tracking_numbers=["1300000031"]),
        ])
        builder.save(str(path))

        doc = Document(str(path))
        assert "日期：2024-05-01" in [p.text for p in doc.paragraphs]
        share, ranking = doc.tables
        assert [c.text for c in share.rows[0].cells] == ["类别", "件数", "占比"]
        assert [c.text for c in share.rows[2].cells] == ["驿站投递", "3", "75.0%"]
        assert [[c.text for c in row.cells] for row in ranking.rows[1:]] == [
            ["1", "李四", "2"],
            ["2", "张三", "1"],
        ]


class TestReportGenerator:
    """
    Tests for the Word summary report.
    """

    def test_generate_report(self, settings, processed, tmp_path):
        path = ReportGenerator(settings).generate(processed, tmp_path / "report.docx")

        assert path.exists()
        doc = Document(str(path))
        texts = [p.text for p in doc.paragraphs]
        assert "菜鸟邮件统计报告" in texts
        courier_table = doc.tables[2]
        assert [cell.text for cell in courier_table.rows[1].cells] == ["1", "李四", "2"]

    def test_report_diagnostics_when_nothing_matched(self, settings, build_table, tmp_path):
        table = build_table("x.xlsx", ["姓名", "金额"], [["张三", "10"]])
        result = ProcessingPipeline(settings).process_tables([table])

        path = ReportGenerator(settings).generate(result, tmp_path / "diag.docx")

        body = "\n".join(p.text for p in Document(str(path)).paragraphs)
        assert "姓名、金额" in body
        assert "邮件号、收寄机构" in body

    def test_failed_result_is_skipped(self, settings, tmp_path):
        assert ReportGenerator(settings).generate(ProcessingResult(), tmp_path / "r.docx") is None


class TestMain:
    """
    Tests for the command-line entry point.
    """

    def test_main_success(self, report_frame, tmp_path, capsys):
        source = tmp_path / "report.xlsx"
        report_frame.to_excel(source, index=False)
        output = tmp_path / "summary.xlsx"

        exit_code = cli.main([str(source), "-o", str(output)])

        assert exit_code == 0
        assert output.exists()
        out = capsys.readouterr().out
        assert "张三：1件" in out
        assert "最终有效数据: 3" in out

    def test_main_detail_lists_tracking_numbers(self, report_frame, tmp_path, capsys):
        source = tmp_path / "report.xlsx"
        report_frame.to_excel(source, index=False)

        exit_code = cli.main([str(source), "-o", str(tmp_path / "summary.xlsx"), "--detail"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "张三 - 需处理邮件 (1件):\n1300000016" in out
        assert "李四 - 需处理邮件 (1件):\n1300000031" in out

    def test_main_failure(self, tmp_path, capsys):
        exit_code = cli.main([str(tmp_path / "missing.xlsx"), "-o", str(tmp_path / "o.xlsx")])

        assert exit_code == 1
        assert "处理失败" in capsys.readouterr().out
