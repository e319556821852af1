"""Unit tests for comment rendering."""

from datetime import datetime, timedelta, timezone

from issue_progress.rendering import format_timestamp, render_report

FOOTER = "\n<sub>*Last update: 2024-05-17 09:30:00 UTC*</sub>\n"


class TestRenderReport:
    """Test cases for render_report."""

    def test_empty_report_renders_footer_only(self, report, fixed_now):
        assert render_report(report, now=fixed_now) == FOOTER

    def test_full_report(self, report, fixed_now):
        staged = (
            report.set_title("release v2")
            .set_summary("rolling out")
            .start_task("build", "Build image", "pending")
            .update_task("build", "done")
        )

        expected = (
            "## RELEASE V2\n\n"
            "rolling out\n\n"
            "### Tasks\n\n"
            "<table>\n"
            "<tr><th>Description</th><th>Status</th></tr>\n"
            "<tr><td>Build image</td><td>done</td></tr>\n"
            "</table>\n"
            + FOOTER
        )
        assert render_report(staged, now=fixed_now) == expected

    def test_sections_are_skipped_when_empty(self, report, fixed_now):
        body = render_report(report.set_summary("only summary"), now=fixed_now)

        assert body == "only summary\n\n" + FOOTER
        assert "##" not in body
        assert "<table>" not in body

    def test_duplicate_keys_render_in_order(self, report, fixed_now):
        staged = (
            report.start_task("a", "A", "pending")
            .start_task("a", "A2", "pending")
            .update_task("a", "done")
        )

        body = render_report(staged, now=fixed_now)

        rows = [line for line in body.splitlines() if line.startswith("<tr><td>")]
        assert rows == [
            "<tr><td>A</td><td>done</td></tr>",
            "<tr><td>A2</td><td>pending</td></tr>",
        ]

    def test_cells_are_not_escaped(self, report, fixed_now):
        staged = report.start_task("k", "<b>bold</b> & co", ":white_check_mark:")
        body = render_report(staged, now=fixed_now)

        assert "<tr><td><b>bold</b> & co</td><td>:white_check_mark:</td></tr>" in body

    def test_task_keys_and_credential_are_not_rendered(self, report, fixed_now):
        body = render_report(report.start_task("secret-key", "Visible", "ok"), now=fixed_now)

        assert "secret-key" not in body
        assert "ghp_secret" not in body
        assert "deploy" not in body

    def test_footer_sub_tag_is_closed(self, report, fixed_now):
        footer = render_report(report, now=fixed_now).splitlines()[-1]

        assert footer.startswith("<sub>")
        assert footer.endswith("</sub>")
        assert footer.count("<sub>") == 1

    def test_rendering_is_deterministic(self, report, fixed_now):
        staged = report.set_title("t").start_task("k", "d", "s")
        assert render_report(staged, now=fixed_now) == render_report(staged, now=fixed_now)

    def test_identity_does_not_affect_body(self, report, fixed_now):
        other = report.__class__.create("other-key", "someone/else", 1)
        assert render_report(report.set_title("x"), now=fixed_now) == render_report(
            other.set_title("x"), now=fixed_now
        )


class TestFormatTimestamp:
    """Test cases for the footer timestamp."""

    def test_named_timezone(self, fixed_now):
        assert format_timestamp(fixed_now) == "2024-05-17 09:30:00 UTC"

    def test_fixed_offset(self):
        tz = timezone(timedelta(hours=2), "CEST")
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5, tzinfo=tz)) == "2024-01-02 03:04:05 CEST"

    def test_naive_time_is_treated_as_local(self):
        naive = datetime(2024, 1, 2, 3, 4, 5)
        value = format_timestamp(naive)

        assert value.startswith("2024-01-02 03:04:05 ")
        assert value == naive.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")
        assert not value.endswith(" ")

    def test_defaults_to_local_time(self):
        value = format_timestamp()
        parsed = datetime.strptime(value[:19], "%Y-%m-%d %H:%M:%S")

        assert abs(parsed - datetime.now()) < timedelta(minutes=1)
        assert value[19] == " "
        assert value[20:]
