import argparse
import logging
import sys


class UsageParser(argparse.ArgumentParser):
    """Argument parser exiting with status 1 and the usage message on bad arguments"""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def configureLogging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
    )
    # keep transport chatter out of the progress output
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def fail(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1
