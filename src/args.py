"""Argument parsing functionality for satisgen."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Args:
        argv (list, optional): Argument tokens; defaults to sys.argv[1:].
    """
    parser = argparse.ArgumentParser(
        prog="satisgen",
        description=(
            "satisgen - Generate a Satis repository manifest from GitHub, "
            "GitLab and Azure DevOps sources"
        ),
        add_help=True,
    )

    parser.add_argument("-i", "--input",
                        dest="INPUT",
                        help="Input file with basic satis.json configuration (default: %(default)s)",
                        action="store", type=str,
                        default=Constants.DEFAULT_INPUT_FILE)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Output file - where to save generated result (default: %(default)s)",
                        action="store", type=str,
                        default=Constants.DEFAULT_OUTPUT_FILE)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: SATISGEN_LOG_LEVEL or INFO)",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--version",
                        action="version",
                        version=f"%(prog)s {Constants.VERSION}")

    return parser.parse_args(argv)
