from analysis.analyze import Analyzer
from analysis.data import ACTIONS, STATUSES
from analysis.output import (
    PieChartRow,
    PieChartStatistic,
    ReportSink,
    Requirement,
    Rule,
    Severity,
    TieredSuggestion,
)
from console_table import console, print_pie_chart
from fight_events import cast, life_surged, status


class TestOutput:
    def test_rule_percent(self):
        rule = Rule(
            name="Keep it up",
            description="",
            requirements=[Requirement(name="a", percent=90), Requirement(name="b", percent=100)],
        )
        assert rule.percent == 95
        assert rule.passed

    def test_rule_without_requirements(self):
        assert Rule(name="Empty", description="").percent == 0

    def test_tiered_suggestion(self):
        tiers = {4: Severity.MAJOR, 1: Severity.MINOR}
        assert TieredSuggestion(content="", why="", tiers=tiers, value=0).severity is None
        assert TieredSuggestion(content="", why="", tiers=tiers, value=3).severity == Severity.MINOR
        assert TieredSuggestion(content="", why="", tiers=tiers, value=4).severity == Severity.MAJOR

    def test_sink_report(self):
        sink = ReportSink()
        sink.checklist.add(Rule(name="Second", description="", display_order=2))
        sink.checklist.add(Rule(name="First", description="", display_order=1))
        sink.statistics.add(
            PieChartStatistic(
                headings=["Consumer", "Count", "%"],
                data=[PieChartRow(label="Full Thrust", value=1, percent="100.00%", color="#0e81f7")],
            )
        )
        report = sink.report()

        assert [rule["name"] for rule in report["checklist"]] == ["First", "Second"]
        assert report["suggestions"] == []
        assert report["statistics"][0]["data"][0]["label"] == "Full Thrust"


class TestConsole:
    def test_print_pie_chart(self):
        chart = PieChartStatistic(
            headings=["Life Surge Consumer", "Count", "%"],
            data=[
                PieChartRow(label="Full Thrust", value=3, percent="75.00%", color="#0e81f7"),
                PieChartRow(label="Other", value=1, percent="25.00%", color="#616161"),
            ],
        )
        with console.capture() as capture:
            print_pie_chart(chart)
        output = capture.get()

        assert "Life Surge Consumer" in output
        assert "Full Thrust" in output
        assert "25.00%" in output

    def test_print_analyzer(self, make_fight):
        events = [
            status(500, "applybuff", STATUSES.RIGHT_EYE_SOLO.id),
            *life_surged(2000, ACTIONS.TRUE_THRUST.id),
            cast(4000, ACTIONS.FULL_THRUST.id),
        ]
        analyzer = Analyzer(make_fight(events))
        analyzer.analyze()

        with console.capture() as capture:
            for job_analyzer in analyzer._analyzers:
                job_analyzer.print()
        output = capture.get()

        assert "Disembowel uptime was 0.00%" in output
        assert "non-optimal GCD 1 time." in output
        assert "1 times" not in output
        assert "tether partner" in output
        assert "Other" in output
