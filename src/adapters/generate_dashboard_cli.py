"""CLI adapter to generate the net worth dashboard.

This module wires the BuildDashboardUseCase to the JSON snapshot repository
and dashboard writer configured through environment variables, and
provides a command-line entry point for a full pipeline run.
"""

from src.domain.errors import PipelineError
from src.infrastructure.container import build_dashboard_use_case, build_paths
from src.infrastructure.logging.logger import get_app_logger


def main() -> int:
    """Run the dashboard pipeline.

    Returns:
        int: Process exit code, ``0`` on success and ``1`` on a fatal error.
    """
    logger = get_app_logger()
    paths = build_paths()
    logger.info(
        f"Generating dashboard from {paths.database_dir} "
        f"with settings {paths.settings_file}"
    )
    try:
        use_case = build_dashboard_use_case(paths)
        dashboard = use_case.execute()
    except PipelineError as exc:
        logger.error(f"Dashboard generation aborted: {exc}")
        return 1

    latest = dashboard.latest
    if latest is None:
        print(f"No snapshots found in {paths.database_dir}.")
        return 0
    print(
        f"Generated dashboard with {len(dashboard.snapshots)} months "
        f"into {paths.dashboard_file} "
        f"(latest {latest.month}: net worth {latest.totals.net_worth} "
        f"{dashboard.metadata.base_currency}, "
        f"{len(dashboard.warnings)} warnings)."
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
