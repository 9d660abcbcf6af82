# repositories/identity_stores.py
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from starlette.requests import Request
from starlette.responses import Response

from humanai_study.core.errors import StoreUnavailableError


logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Uniform capability over client-side identity storage.

    Reads return None when a key is absent or the store cannot be read.
    Writes and removals raise StoreUnavailableError when the store refuses
    them; callers on a best-effort path catch it.
    """

    name = "store"

    def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store. A blocked store behaves like disabled browser storage."""

    name = "memory"

    def __init__(self, data: Optional[Dict[str, str]] = None, blocked: bool = False):
        self.data: Dict[str, str] = dict(data or {})
        self.blocked = blocked

    def read(self, key: str) -> Optional[str]:
        if self.blocked:
            return None
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        if self.blocked:
            raise StoreUnavailableError(f"{self.name} store is blocked")
        self.data[key] = value

    def remove(self, key: str) -> None:
        if self.blocked:
            raise StoreUnavailableError(f"{self.name} store is blocked")
        self.data.pop(key, None)

    def keys(self) -> List[str]:
        if self.blocked:
            return []
        return list(self.data)


class JsonFileStore(KeyValueStore):
    """Durable key/value pairs kept in a single JSON object on disk."""

    name = "json_file"

    def __init__(self, path: Path):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.debug("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write {self.path}") from e

    def read(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def write(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def keys(self) -> List[str]:
        return list(self._load())


class CookieStore(KeyValueStore):
    """
    Cookie jar for one request/response cycle.

    Reads see the request cookies plus anything written during this cycle,
    so a read-back after write reflects what the response will set.
    A max_age of None writes session cookies.
    """

    name = "cookie"

    def __init__(
        self,
        request: Request,
        response: Response,
        max_age: Optional[int] = None,
        secure: bool = False,
    ):
        self.response = response
        self.max_age = max_age
        self.secure = secure
        self._cookies: Dict[str, str] = dict(request.cookies)

    def read(self, key: str) -> Optional[str]:
        return self._cookies.get(key)

    def write(self, key: str, value: str) -> None:
        try:
            self.response.set_cookie(
                key,
                value,
                max_age=self.max_age,
                path="/",
                samesite="lax",
                secure=self.secure,
            )
        except (TypeError, ValueError) as e:
            raise StoreUnavailableError(f"Cannot set cookie {key}") from e
        self._cookies[key] = value

    def remove(self, key: str) -> None:
        self.response.delete_cookie(key, path="/", samesite="lax", secure=self.secure)
        self._cookies.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._cookies)
