"""satisgen - Satis manifest generator for multi-provider PHP package sources.

Reads an input configuration listing GitHub organizations, GitLab groups and
Azure DevOps projects, keeps every repository that is active, carries a
composer.json and is not excluded, and writes the resulting satis.json.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from constants import ExitCodes, apply_env_overrides
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from aggregator import aggregate
from manifest import build_manifest, load_input, write_manifest
from repository.errors import ConfigurationError

logger = logging.getLogger(__name__)


def run(args):
    """Generate the manifest described by parsed CLI arguments.

    Args:
        args (argparse.Namespace): Parsed arguments with INPUT and OUTPUT.

    Returns:
        int: Exit code
    """
    try:
        config = load_input(args.INPUT)
    except OSError as e:
        logger.error("Could not read input file %s: %s", args.INPUT, e)
        return ExitCodes.FILE_ERROR.value
    except ConfigurationError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    try:
        repositories = aggregate(config)
    except ConfigurationError as e:
        logger.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value

    manifest = build_manifest(config, repositories)
    try:
        write_manifest(manifest, args.OUTPUT)
    except (OSError, TypeError, ValueError) as e:
        logger.error("Could not write file %s: %s", args.OUTPUT, e)
        return ExitCodes.FILE_ERROR.value

    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    # CLI --loglevel wins over SATISGEN_LOG_LEVEL; configure_logging reads the env
    if args.LOG_LEVEL:
        os.environ['SATISGEN_LOG_LEVEL'] = str(args.LOG_LEVEL).upper()
    configure_logging(getattr(args, "LOG_FILE", None))
    apply_env_overrides()

    if is_debug_enabled(logger):
        logger.debug(
            "Arguments parsed",
            extra=extra_context(event="function_entry", component="cli", action="main",
                                target=args.INPUT)
        )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
