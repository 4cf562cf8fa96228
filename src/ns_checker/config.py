import logging
import os
import sys
from dataclasses import dataclass, field
from typing import List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    dirs: List[str] = field(default_factory=list)
    log_level: str = "INFO"
    separator: str = "\n"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        env = os.environ if environ is None else environ
        raw_dirs = env.get("NS_CHECKER_DIRS", "")
        return cls(
            dirs=[d for d in raw_dirs.split(os.pathsep) if d.strip()],
            log_level=env.get("NS_CHECKER_LOG_LEVEL", "INFO").upper(),
            separator=env.get("NS_CHECKER_SEPARATOR", "\n"),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
