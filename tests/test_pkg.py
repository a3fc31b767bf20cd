from __future__ import annotations

from xcat_setup.lib.pkg import PackageManager, ensure_package, select_by_prefix


def test_select_by_prefix_is_case_insensitive():
    names = ["xCAT", "xCAT-server", "xcat-genesis-base-x86_64", "perl-xCAT", "wget", "XCATfoo"]
    assert select_by_prefix(names, "xcat") == ["xCAT", "xCAT-server", "xcat-genesis-base-x86_64", "XCATfoo"]


def test_installed_names_parses_rpm_output(runner, make_host):
    runner.on(["rpm", "-qa"], stdout="wget\nxCAT-server\n\nwget\nbash\n")
    pm = PackageManager(make_host(), "dnf")
    assert pm.installed_names() == ["bash", "wget", "xCAT-server"]


def test_ensure_package_skips_installed(runner, make_host):
    runner.on(["rpm", "-q", "--quiet", "wget"], returncode=0)
    pm = PackageManager(make_host(), "dnf")

    assert ensure_package(pm, "wget") is False
    assert runner.called("dnf", "install") == []


def test_ensure_package_installs_missing_once(runner, make_host):
    runner.on(["rpm", "-q", "--quiet", "initscripts"], returncode=1)
    pm = PackageManager(make_host(), "yum")

    assert ensure_package(pm, "initscripts") is True
    assert runner.called("yum", "install") == [["yum", "install", "-y", "initscripts"]]


def test_queries_run_in_dry_run_but_changes_do_not(runner, make_host):
    runner.on(["rpm", "-q", "--quiet", "wget"], returncode=1)
    pm = PackageManager(make_host(dry_run=True), "dnf")

    ensure_package(pm, "wget")

    assert runner.called("rpm") == [["rpm", "-q", "--quiet", "wget"]]
    assert runner.called("dnf") == []
    assert runner.dry_calls == [["dnf", "install", "-y", "wget"]]
