"""
Simple Test Framework entry point.

Test files register against the default registry when imported:

    import stf

    @stf.test("Integrals", "Equal")
    def _():
        stf.assert_eq(1, 1)

    stf.exclude("Integrals", "Broken")

    if __name__ == "__main__":
        stf.main()

main() loads the configuration, runs the registry and exits with the
run's status.
"""

import sys
from typing import NoReturn, Optional
import logging

from .assertions import set_comparator
from .comparator import Comparator
from .config import HarnessConfig
from .exceptions import ConfigurationError
from .output import ConsoleReporter
from .registry import TestRegistry
from .runner import TestRunner
from .utils.constants import EXIT_HARNESS_ERROR

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

default_registry = TestRegistry()

# Registration surface bound to the default registry
test = default_registry.test
register = default_registry.register


def exclude(group: str, name: str) -> bool:
    """Exclude group::name from the default registry's run."""
    return default_registry.exclude_test(group, name)


def run(
    registry: Optional[TestRegistry] = None,
    config: Optional[HarnessConfig] = None,
    reporter: Optional[ConsoleReporter] = None
) -> int:
    """
    Run a registry and return the exit status.

    Args:
        registry: Registry to run (defaults to the process-wide registry)
        config: Configuration (defaults to $STF_CONFIG or built-in defaults)
        reporter: Console reporter (defaults to stdout)

    Returns:
        Process exit status
    """
    reporter = reporter or ConsoleReporter()

    if config is None:
        try:
            config = HarnessConfig.load()
        except ConfigurationError as e:
            reporter.line(f"Error: {e.message}")
            return EXIT_HARNESS_ERROR

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    set_comparator(Comparator.from_config(config, reporter))

    runner = TestRunner(registry if registry is not None else default_registry, config, reporter)
    summary = runner.run()
    logger.debug(f"Run finished with exit status {summary.exit_code}")
    return summary.exit_code


def main(registry: Optional[TestRegistry] = None, config: Optional[HarnessConfig] = None) -> NoReturn:
    sys.exit(run(registry, config))
