"""
System command utilities for the split tunnel
"""
import subprocess
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Any, Callable, List, Optional, Tuple
import logging

logger = logging.getLogger("uvicorn")


def run_command(cmd: List[str], use_sudo: bool = False, timeout: Optional[float] = None) -> Tuple[bool, str]:
    """
    Execute a system command

    Args:
        cmd: Command and arguments as list
        use_sudo: Whether to prepend sudo to the command
        timeout: Seconds before the process is killed

    Returns:
        Tuple of (success: bool, output: str)
    """
    try:
        if use_sudo:
            cmd = ["sudo"] + cmd
        result = subprocess.run(cmd, capture_output=True, text=True, check=True, timeout=timeout)
        return True, result.stdout
    except subprocess.CalledProcessError as e:
        return False, e.stderr or e.stdout or f"exit status {e.returncode}"
    except subprocess.TimeoutExpired:
        return False, f"timed out after {timeout}s"
    except OSError as e:
        return False, str(e)


def bounded_wait(operation: Callable[..., Any], timeout: float, /, *args, **kwargs) -> Tuple[bool, Any]:
    """
    Race an operation against a timer

    Each call gets its own worker, so the timer only measures the
    operation. The operation's own exceptions propagate. When the timer
    wins the result is (False, None) and the caller decides how to degrade.
    operation and timeout are positional-only, leaving both names free for
    the operation's keyword arguments.

    Returns:
        Tuple of (finished: bool, value)
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="bounded-wait")
    future = executor.submit(operation, *args, **kwargs)
    try:
        return True, future.result(timeout=timeout)
    except FutureTimeout:
        logger.debug(f"{getattr(operation, '__name__', operation)} gave up after {timeout}s")
        return False, None
    finally:
        executor.shutdown(wait=False)


def split_list(raw: Optional[str]) -> List[str]:
    """Turn a comma-separated input into trimmed, non-empty tokens in input order"""
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]
