"""
In-memory response cache with TTL, keyed by rounded coordinates.
Only live results are stored; fallbacks are recomputed on every call.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional


class TTLCache:
    def __init__(self, ttl_seconds: int):
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._ttl = timedelta(seconds=ttl_seconds)

    @staticmethod
    def make_key(kind: str, lat: float, lon: float) -> str:
        """~1 km grid is plenty for daily irradiance data"""
        return f"{kind}_{lat:.2f}_{lon:.2f}"

    def get(self, key: str) -> Optional[Any]:
        """Get value if not expired"""
        if key in self._cache:
            entry = self._cache[key]
            if datetime.now() < entry['expires']:
                return entry['data']
            del self._cache[key]
        return None

    def set(self, key: str, data: Any):
        self._prune()
        self._cache[key] = {
            'data': data,
            'expires': datetime.now() + self._ttl,
        }

    def _prune(self):
        """Drop every expired entry, not only the one being read"""
        now = datetime.now()
        expired = [k for k, e in self._cache.items() if now >= e['expires']]
        for key in expired:
            del self._cache[key]

    def stats(self) -> Dict:
        now = datetime.now()
        valid = sum(1 for e in self._cache.values() if now < e['expires'])
        return {
            'total_entries': len(self._cache),
            'valid_entries': valid,
            'expired_entries': len(self._cache) - valid,
        }

    def clear(self):
        self._cache.clear()
