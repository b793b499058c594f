"""Working-directory resolution: sentinel → session directory → sanitized path.

The session store is an external collaborator; only its protocol and an
in-memory implementation live here.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Protocol, Tuple

from gitdriver.git.errors import validation_error
from gitdriver.safety.paths import sanitize_path

SESSION_SENTINEL = "."


def session_key(tenant_id: str) -> str:
    return f"session:workingDir:{tenant_id}"


class SessionStore(Protocol):
    async def get(self, tenant_id: str, key: str) -> Optional[str]: ...

    async def set(self, tenant_id: str, key: str, value: str) -> None: ...

    async def delete(self, tenant_id: str, key: str) -> None: ...


class InMemorySessionStore:
    """Tenant-keyed dict store, for tests and single-process use."""

    def __init__(self) -> None:
        self._data: Dict[Tuple[str, str], str] = {}

    async def get(self, tenant_id: str, key: str) -> Optional[str]:
        return self._data.get((tenant_id, key))

    async def set(self, tenant_id: str, key: str, value: str) -> None:
        self._data[(tenant_id, key)] = value

    async def delete(self, tenant_id: str, key: str) -> None:
        self._data.pop((tenant_id, key), None)


class WorkingDirectoryResolver:
    def __init__(self, store: Optional[SessionStore] = None, base_dir: Optional[str] = None) -> None:
        self.store = store
        self.base_dir = base_dir

    async def resolve(self, path: str, tenant_id: str = "default") -> str:
        """Resolve *path* (or the session sentinel) to a sanitized absolute path.

        A missing session directory is a ``validation-error``; the process
        working directory is never used as a fallback.
        """
        if path == SESSION_SENTINEL:
            stored = await self.store.get(tenant_id, session_key(tenant_id)) if self.store else None
            if not stored:
                raise validation_error(
                    "No session working directory is set; pass an explicit path or set one first",
                    tenant_id=tenant_id,
                )
            path = stored
        return sanitize_path(path, allow_absolute=True, root_dir=self.base_dir)

    async def set_session_directory(self, path: str, tenant_id: str = "default") -> str:
        if self.store is None:
            raise validation_error("No session store is configured")
        resolved = sanitize_path(path, allow_absolute=True, root_dir=self.base_dir)
        if not os.path.isdir(resolved):
            raise validation_error(f"Directory does not exist: {resolved}", path=resolved)
        await self.store.set(tenant_id, session_key(tenant_id), resolved)
        return resolved

    async def clear_session_directory(self, tenant_id: str = "default") -> Optional[str]:
        """Forget the session directory and return the previous value."""
        if self.store is None:
            return None
        key = session_key(tenant_id)
        previous = await self.store.get(tenant_id, key)
        await self.store.delete(tenant_id, key)
        return previous
