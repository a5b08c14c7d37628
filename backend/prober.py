"""
Best-effort reachability checks through the tunnel
Results are informational only.
"""
import logging
from typing import List

from config_manager import PROBE_SAMPLE_SIZE, PROBE_TIMEOUT
from models import AddressFamily, NetworkTarget, ProbeResult
from utils import bounded_wait, run_command

logger = logging.getLogger("uvicorn")


def ping_command(target: NetworkTarget) -> List[str]:
    cmd = ["ping"]
    if target.family is AddressFamily.IPV6:
        cmd.append("-6")
    return cmd + ["-c", "2", "-i", "0.5", "-W", "2", "-w", "5", target.address]


def probe(target: NetworkTarget) -> ProbeResult:
    finished, result = bounded_wait(run_command, PROBE_TIMEOUT, ping_command(target), timeout=PROBE_TIMEOUT)
    if not finished:
        logger.warning(f"Reachability check for {target.address} timed out after {PROBE_TIMEOUT}s")
        return ProbeResult(address=target.address, reachable=False, detail="timed out")

    success, output = result
    if not success:
        logger.warning(f"Reachability check for {target.address} failed: {output.strip()}")
        return ProbeResult(address=target.address, reachable=False, detail=output.strip())

    logger.info(f"{target.address} is reachable via tunnel")
    return ProbeResult(address=target.address, reachable=True)


def probe_reachability(targets: List[NetworkTarget]) -> List[ProbeResult]:
    """Check the first few routed addresses, in routing order"""
    sample = targets[:PROBE_SAMPLE_SIZE]
    if not sample:
        return []

    logger.info(f"Checking reachability of {len(sample)} of {len(targets)} routed address(es)")
    return [probe(target) for target in sample]
