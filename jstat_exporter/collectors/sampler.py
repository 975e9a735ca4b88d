"""Runs jstat against the target JVM and captures its output."""

import logging
import os
import subprocess
import time
from typing import Dict, List, Optional, Union

from ..exceptions import ExecutionError, SamplerTimeoutError
from ..utils.metrics import Sample
from .reports import ReportSpec


class JstatSampler:
    """Invoke ``<path> <flag> <pid>`` with a bounded timeout."""

    def __init__(
        self,
        path: str = "/usr/bin/jstat",
        timeout: float = 10.0,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize sampler.

        Args:
            path: jstat executable path
            timeout: Seconds to wait for one invocation
            logger: Optional logger instance
        """
        self.path = path
        self.timeout = timeout
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)

        # jstat formats numbers with the JVM's default locale
        self._env: Dict[str, str] = os.environ.copy()
        self._env["LC_ALL"] = "C"

    def run(self, flag: str, pid: Union[str, int]) -> str:
        """
        Execute jstat and return its stdout.

        Args:
            flag: Report mode flag (e.g. "-gcold")
            pid: Target JVM process id

        Returns:
            str: Command stdout

        Raises:
            ExecutionError: If jstat cannot be started or exits non-zero
            SamplerTimeoutError: If jstat does not finish within the timeout
        """
        command: List[str] = [self.path, flag, str(pid)]
        self.logger.debug(f"Executing command: {' '.join(command)}")

        try:
            # run() kills and reaps the child before re-raising TimeoutExpired
            proc = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                env=self._env,
                check=False
            )
        except subprocess.TimeoutExpired as e:
            raise SamplerTimeoutError(
                f"{' '.join(command)} timed out after {self.timeout}s",
                command=command,
                timeout=self.timeout
            ) from e
        except OSError as e:
            raise ExecutionError(
                f"Failed to execute {self.path}: {e}",
                command=command,
                cause=e
            ) from e

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise ExecutionError(
                f"{' '.join(command)} failed with exit code {proc.returncode}: {detail}",
                command=command,
                returncode=proc.returncode
            )

        self.logger.debug(f"Command completed successfully ({len(proc.stdout)} bytes)")
        return proc.stdout

    def sample(self, report: ReportSpec, pid: Union[str, int]) -> Sample:
        """
        Capture one report for the target process.

        Args:
            report: Report mode to run
            pid: Target JVM process id

        Returns:
            Sample: Raw output with its capture time
        """
        text = self.run(report.flag, pid)
        return Sample(report=report.name, text=text, captured_at=time.time())
