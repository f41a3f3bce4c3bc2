"""Autocomplete suggestions from the MusicBrainz recording search."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests


@dataclass
class SuggestionLookup:
    ok: bool
    suggestions: List[Dict[str, str]] = field(default_factory=list)
    error: Optional[str] = None


def _artist_credit(recording) -> str:
    credits = recording.get('artist-credit') or []
    return ', '.join(c.get('name', '') for c in credits if isinstance(c, dict))


def lookup_suggestions(query: str, api_url: str, user_agent: str, limit: int = 5, timeout: float = 5) -> SuggestionLookup:
    if not query:
        return SuggestionLookup(ok=True)
    try:
        r = requests.get(
            api_url,
            params={'query': query, 'limit': limit, 'fmt': 'json'},
            headers={'User-Agent': user_agent, 'Accept': 'application/json'},
            timeout=timeout,
        )
        r.raise_for_status()
        data = r.json()
        suggestions = [
            {'title': rec['title'], 'artist': _artist_credit(rec)}
            for rec in data['recordings']
        ]
    except requests.RequestException as exc:
        return SuggestionLookup(ok=False, error=f'request failed: {exc}')
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        return SuggestionLookup(ok=False, error=f'malformed response: {exc!r}')
    return SuggestionLookup(ok=True, suggestions=suggestions)
