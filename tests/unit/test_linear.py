"""Unit tests for the single-bar linear progress formatter."""

from io import StringIO

from spinline.callbacks import RunListener
from spinline.config import RendererConfig
from spinline.linear import LinearProgressFormatter
from spinline.models import ErrorInfo, Location, RunSummary


def make_formatter(out: StringIO) -> LinearProgressFormatter:
    return LinearProgressFormatter(output=out, config=RendererConfig(bar_width=10))


class TestLinearFormatter:
    """Tests for LinearProgressFormatter."""

    def test_implements_protocol(self) -> None:
        assert isinstance(make_formatter(StringIO()), RunListener)

    def test_run_start_creates_loader(self) -> None:
        fmt = make_formatter(StringIO())
        fmt.on_run_start(4)
        assert fmt.loader is not None
        assert fmt.loader.total == 4
        assert fmt.loader.width == 10
        assert fmt.loader.description == "Running examples"

    def test_each_result_advances_bar(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_run_start(2)
        fmt.on_item_start("user_spec.rb", "creates", Location("./spec/models/user_spec.rb", 12))
        fmt.on_item_passed("user_spec.rb")
        assert fmt.loader.current == 1
        assert "[====>     ] 50% 1/2 ✓ models/user_spec.rb:12" in out.getvalue()

    def test_failed_and_pending_symbols(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_run_start(2)
        fmt.on_item_start("a.rb", "one", Location("spec/a.rb", 1))
        fmt.on_item_failed("a.rb", ErrorInfo("E", "boom"))
        fmt.on_item_start("a.rb", "two", Location("spec/a.rb", 2))
        fmt.on_item_pending("a.rb")
        text = out.getvalue()
        assert "✗ spec/a.rb:1" in text
        assert "* spec/a.rb:2" in text
        assert len(fmt.failures) == 1
        assert len(fmt.pending) == 1

    def test_run_end_summary(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_run_start(3)
        fmt.on_item_start("a.rb", "waits", Location("spec/a.rb", 5), "A waits")
        fmt.on_item_pending("a.rb")
        fmt.on_run_end(RunSummary(3, 1, 1, 2.5))
        text = out.getvalue()
        assert "100% 3/3 Completed\n" in text
        assert "3 examples, 1 failures, 1 pending (Finished in 2.5 seconds)" in text
        assert "Pending examples:\n  A waits\n" in text

    def test_run_end_without_pending(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_run_start(1)
        fmt.on_run_end(RunSummary(1, 0, 0, 0.25))
        assert "1 examples (Finished in 250 milliseconds)" in out.getvalue()
        assert "Pending" not in out.getvalue()

    def test_dump_failures(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_run_start(2)
        fmt.on_item_start("a.rb", "fails", Location("spec/a.rb", 9), "A fails")
        fmt.on_item_failed("a.rb", ErrorInfo("E", "first line\nsecond line"))
        fmt.on_item_start("a.rb", "also fails", Location("spec/a.rb", 20))
        fmt.on_item_failed("a.rb")
        start = len(out.getvalue())
        fmt.on_dump_failures()
        report = out.getvalue()[start:]
        assert "Failures:" in report
        assert "  1) A fails\n     first line\n     # ./spec/a.rb:9\n" in report
        assert "  2) also fails\n     No exception message\n     # ./spec/a.rb:20\n" in report
        assert "second line" not in report

    def test_long_message_is_truncated(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_run_start(1)
        fmt.on_item_start("a.rb", "fails", Location("spec/a.rb", 1))
        fmt.on_item_failed("a.rb", ErrorInfo("E", "m" * 150))
        fmt.on_dump_failures()
        assert "m" * 97 + "...\n" in out.getvalue()

    def test_no_failures_prints_nothing(self) -> None:
        out = StringIO()
        make_formatter(out).on_dump_failures()
        assert out.getvalue() == ""

    def test_result_before_run_start(self) -> None:
        out = StringIO()
        fmt = make_formatter(out)
        fmt.on_item_passed("a.rb")
        assert fmt.loader is not None
        assert fmt.loader.current == 1
