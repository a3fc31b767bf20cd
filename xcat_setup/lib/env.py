from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Paths:
    go_xcat_tmp: str = "/tmp/go-xcat"
    go_xcat_payload: str = "./go-xcat"
    openssl_template: str = "/opt/xcat/share/xcat/ca/openssl.cnf.tmpl"
    openssl_template_backup: str = "/opt/xcat/share/xcat/ca/openssl.cnf.tmpl.orig"
    dockerhost_cert_script: str = "/opt/xcat/share/xcat/scripts/setup-dockerhost-cert.sh"
    dockerhost_cert_script_backup: str = "/opt/xcat/share/xcat/scripts/setup-dockerhost-cert.sh.orig"
    xcat_profile: str = "/etc/profile.d/xcat.sh"
    xcat_log: str = "/var/log/xcat/xcat.log"
    state_default: str = "/var/lib/xcat-setup/state.json"
    log_default: str = "/var/log/xcat-setup.log"


@dataclass(frozen=True)
class Product:
    package_prefix: str = "xcat"
    legacy_package: str = "xCAT"
    prerequisites: Tuple[str, ...] = ("epel-release", "initscripts", "wget", "ca-certificates")
    repositories: Tuple[str, ...] = ("epel", "crb")
    daemon_unit: str = "xcatd"
    package_managers: Tuple[str, ...] = ("dnf", "yum")


PATHS = Paths()
PRODUCT = Product()
