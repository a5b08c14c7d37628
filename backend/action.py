"""
Split tunnel command line entry point

Reads INPUT_* variables, logs in workflow-command format and writes outputs
to $GITHUB_OUTPUT when running inside a workflow.
"""
import logging
import os
import sys
from typing import Optional

from pydantic import ValidationError

import split_tunnel
from config_manager import load_inputs
from exceptions import SplitTunnelError

logger = logging.getLogger("uvicorn")


def escape_data(message: str) -> str:
    """Escape a message so a workflow command keeps it on one line"""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsFormatter(logging.Formatter):
    """Render warnings and errors as workflow annotations"""

    PREFIXES = {
        logging.DEBUG: "::debug::",
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
        logging.CRITICAL: "::error::",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        prefix = self.PREFIXES.get(record.levelno)
        if prefix is None:
            return message
        return prefix + escape_data(message)


def setup_logging(level: int = logging.INFO):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(ActionsFormatter("%(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)


def set_output(name: str, value: str, output_file: Optional[str] = None):
    """Append an output for later workflow steps"""
    output_file = output_file or os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        logger.debug(f"GITHUB_OUTPUT not set, dropping output {name}")
        return
    with open(output_file, "a") as f:
        f.write(f"{name}={value}\n")


def main() -> int:
    setup_logging(logging.DEBUG if os.environ.get("RUNNER_DEBUG") == "1" else logging.INFO)

    try:
        inputs = load_inputs()
        outcome = split_tunnel.run_invocation(**inputs.model_dump())
    except ValidationError as e:
        logger.error(f"WireGuard action failed: invalid input: {e}")
        return 1
    except SplitTunnelError as e:
        logger.error(f"WireGuard action failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"WireGuard action failed: {e}")
        return 1

    set_output("routes_applied", str(outcome.routes_applied))
    if outcome.public_ip:
        set_output("public_ip", outcome.public_ip)
    return 0


if __name__ == "__main__":
    sys.exit(main())
