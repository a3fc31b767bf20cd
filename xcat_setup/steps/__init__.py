from .step_20_remove_packages import RemovePackagesStep
from .step_30_install_prerequisites import InstallPrerequisitesStep
from .step_35_enable_repos import EnableReposStep
from .step_40_run_installer import RunInstallerStep
from .step_50_patch_openssl_template import PatchOpensslTemplateStep
from .step_55_patch_dockerhost_cert import PatchDockerhostCertStep
from .step_60_reinit_xcat import ReinitXcatStep
from .step_70_restart_xcatd import RestartXcatdStep
from .step_80_verify_xcatd import VerifyXcatdStep

__all__ = [
    "RemovePackagesStep",
    "InstallPrerequisitesStep",
    "EnableReposStep",
    "RunInstallerStep",
    "PatchOpensslTemplateStep",
    "PatchDockerhostCertStep",
    "ReinitXcatStep",
    "RestartXcatdStep",
    "VerifyXcatdStep",
]
