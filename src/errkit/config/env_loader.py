"""Prefixed environment reader backing errkit settings.

Every errkit consumer reads its configuration from ``{PREFIX}_*`` variables
(``ERRKIT_LOG_LEVEL``, ``BILLING_TX_MAX_ATTEMPTS``, ...). EnvLoader collects
those variables, low -> high precedence:

1) .env file (the given one, else ``.env`` in the working directory)
2) OS environment variables
3) Explicit overrides
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Tuple

from dotenv import dotenv_values


class EnvLoader:
    """Collect the ``{prefix}_*`` variables of one settings prefix.

    Example:
        env = EnvLoader("BILLING").load()
        env.get("BILLING_LOG_LEVEL")

    Without a prefix every variable is kept.
    """

    def __init__(self, prefix: Optional[str] = None, env_file: Optional[Path | str] = None) -> None:
        self.prefix = prefix
        self.env_file = Path(env_file) if env_file else None

    def _owns(self, key: str) -> bool:
        return self.prefix is None or key.startswith(f"{self.prefix}_")

    def _dotenv(self) -> Iterable[Tuple[str, Optional[str]]]:
        path = self.env_file or Path.cwd() / ".env"
        if not path.is_file():
            return ()
        return dotenv_values(path).items()

    def load(self, overrides: Optional[Mapping[str, object]] = None) -> Dict[str, str]:
        """Merge the sources, keeping only variables of this prefix.

        Keys declared without a value in the .env file are skipped.
        """
        data: Dict[str, str] = {}
        for source in (self._dotenv(), os.environ.items(), (overrides or {}).items()):
            data.update((k, str(v)) for k, v in source if v is not None and self._owns(k))
        return data


__all__ = ["EnvLoader"]
