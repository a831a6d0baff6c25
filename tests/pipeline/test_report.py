# tests/pipeline/test_report.py
from datetime import datetime

from acl_sweep.errors import MutationError
from acl_sweep.pipeline.report import (
    format_final_summary,
    format_run_summary,
    log_run_summary,
    print_final_summary,
)


def _demo_kwargs():
    return dict(
        bucket="media-archive",
        checkpoint_path="/tmp/fixacl-lastkey.txt",
        start_after="photos/2019/IMG_0001.jpg",
        canned_acl="private",
        workers=10,
        queue_size=10,
        page_size=1000,
        report_interval_s=60.0,
        start_time=datetime(2025, 8, 18, 12, 34, 56),
    )


def test_format_run_summary_no_color_contains_key_fields():
    s = format_run_summary(color=False, **_demo_kwargs())
    assert "Start Time: 2025-08-18 12:34:56" in s
    assert "Bucket:                     s3://media-archive" in s
    assert "Canned ACL:                 private" in s
    assert "Checkpoint file:            /tmp/fixacl-lastkey.txt" in s
    assert "Resume after:               photos/2019/IMG_0001.jpg" in s
    assert "Keys per listing page:      1,000" in s
    assert "Report interval:            60s" in s
    assert "Work queue capacity:        10" in s
    assert "Worker threads:             10" in s
    assert "Endpoint:" not in s
    # no ANSI codes when color=False
    assert "\x1b[" not in s


def test_format_run_summary_fresh_run_and_endpoint():
    kwargs = _demo_kwargs() | {"start_after": None, "endpoint_url": "http://minio:9000"}
    s = format_run_summary(color=False, **kwargs)
    assert "Resume after:               (beginning)" in s
    assert "Endpoint:                   http://minio:9000" in s


def test_format_run_summary_color_includes_ansi():
    s = format_run_summary(color=True, **_demo_kwargs())
    assert "\x1b[31m" in s  # red heading
    assert "\x1b[4m" in s   # underlined section title


def test_format_run_summary_truncates_long_keys():
    long_key = "deep/" + ("a" * 200)
    s = format_run_summary(color=False, **_demo_kwargs() | {"start_after": long_key})
    assert "…" in s
    assert long_key not in s


def test_log_run_summary_emits_info(caplog):
    caplog.set_level("INFO")
    log_run_summary(**_demo_kwargs())
    messages = [rec.getMessage() for rec in caplog.records]
    assert any("ACL Sweep Configuration" in m for m in messages)
    assert any("Bucket:                     s3://media-archive" in m for m in messages)


def test_final_summary_success_and_failure():
    start = datetime(2025, 1, 1, 0, 0, 0)
    end = datetime(2025, 1, 1, 0, 1, 40)

    ok = format_final_summary(
        processed=1000, start_time=start, end_time=end, last_key="z", color=False
    )
    assert "Sweep completed!" in ok
    assert "Keys processed:             1,000" in ok
    assert "Last key enqueued:          z" in ok
    assert "Total Runtime:              0:01:40" in ok
    assert "Keys per second:            10.0" in ok

    err = MutationError("k", RuntimeError("AccessDenied"))
    bad = format_final_summary(
        processed=3, start_time=start, end_time=start, error=err, color=False
    )
    assert "Sweep failed: mutating 'k' failed: AccessDenied" in bad
    assert "Last key enqueued:          (none)" in bad
    assert "Keys per second:            0.0" in bad


def test_print_final_summary_writes_to_stdout(capfd):
    start = datetime(2025, 1, 1)
    print_final_summary(processed=0, start_time=start, end_time=start)
    out, _ = capfd.readouterr()
    assert "Keys processed:" in out
