"""
Tests for step ordering, --start-at/--stop-after and fail-fast behaviour.
"""
import pytest

from renv_bootstrap.errors import DelegatedInstallFailure
from renv_bootstrap.main import build_steps
from renv_bootstrap.pipeline import run_pipeline
from renv_bootstrap.report import new_report

from .conftest import FakePackageManager

ALL_STEPS = [
    "10_check_runtime",
    "20_patch_toolchain",
    "30_init_lockfile",
    "40_install_packages",
    "50_install_repo_packages",
    "60_snapshot",
]


def test_full_run_calls_client_in_order(make_ctx):
    client = FakePackageManager()
    result = run_pipeline(ctx=make_ctx(client=client), state=new_report(), steps=build_steps())

    assert result.ran_steps == ALL_STEPS
    assert result.skipped_steps == []
    assert client.calls == [
        ("ensure_initialized", ()),
        ("install", (["survival", "glmnet"],)),
        ("ensure_repository_manager", ()),
        ("install", (["bioc::DOSE", "bioc::enrichplot"],)),
        ("snapshot", ()),
    ]
    assert result.state["execution"]["current_step"] is None


def test_stop_after(make_ctx, home):
    client = FakePackageManager()
    result = run_pipeline(
        ctx=make_ctx(client=client), state=new_report(), steps=build_steps(), stop_after="20_patch_toolchain"
    )

    assert result.ran_steps == ALL_STEPS[:2]
    assert client.calls == []
    assert (home / ".R" / "Makevars").exists()


def test_start_at_still_checks_runtime(make_ctx, home):
    client = FakePackageManager()
    result = run_pipeline(
        ctx=make_ctx(client=client), state=new_report(), steps=build_steps(), start_at="60_snapshot"
    )

    assert result.ran_steps == ["10_check_runtime", "60_snapshot"]
    assert result.skipped_steps == ALL_STEPS[1:5]
    assert client.ops == ["snapshot"]
    assert not (home / ".R").exists()


def test_unknown_step_id_rejected_before_running(make_ctx):
    client = FakePackageManager()
    with pytest.raises(ValueError):
        run_pipeline(ctx=make_ctx(client=client), state=new_report(), steps=build_steps(), stop_after="99_nope")
    assert client.calls == []


def test_failure_aborts_remaining_steps(make_ctx):
    client = FakePackageManager(fail_on="ensure_repository_manager", returncode=7)
    state = new_report()

    with pytest.raises(DelegatedInstallFailure) as exc:
        run_pipeline(ctx=make_ctx(client=client), state=state, steps=build_steps())

    assert exc.value.returncode == 7
    assert client.ops == ["ensure_initialized", "install", "ensure_repository_manager"]
    assert state["execution"]["current_step"] == "50_install_repo_packages"


def test_stop_after_before_start_at_rejected(make_ctx):
    client = FakePackageManager()
    with pytest.raises(ValueError):
        run_pipeline(
            ctx=make_ctx(client=client),
            state=new_report(),
            steps=build_steps(),
            start_at="60_snapshot",
            stop_after="20_patch_toolchain",
        )
    assert client.calls == []


def test_dry_run_records_would_bootstrap(make_ctx, home):
    result = run_pipeline(
        ctx=make_ctx(dry_run=True), state=new_report(), steps=build_steps(), stop_after="30_init_lockfile"
    )

    assert result.state["execution"]["decisions"]["lockfile_bootstrapped"] == "would_bootstrap"
    assert not (home / ".R").exists()
