"""Data models for sources, provider candidates and manifest records."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Generic, List, Optional, TypeVar

from constants import Constants

T = TypeVar("T")


@dataclass
class DecodeResult(Generic[T]):
    """Outcome of decoding one JSON entry: a value, or the list of field errors."""
    value: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None and not self.errors


def _require_string(entry: Dict[str, Any], key: str, errors: List[str], allow_empty: bool = False) -> str:
    value = entry.get(key)
    if not isinstance(value, str):
        errors.append(f"`{key}` must be a string")
        return ""
    if not allow_empty and not value.strip():
        errors.append(f"`{key}` must not be empty")
    return value


@dataclass(frozen=True)
class SourceDescriptor:
    """One upstream provider to enumerate (an organization, group or project)."""
    kind: str
    identifier: str
    credential: str = ""
    exclude: FrozenSet[str] = frozenset()

    @classmethod
    def from_dict(cls, entry: Any) -> "DecodeResult[SourceDescriptor]":
        """Decode an input `sources` entry.

        `sourceAuth` and `exclude` are optional; an absent credential means
        anonymous access.
        """
        if not isinstance(entry, dict):
            return DecodeResult(errors=["source entry must be an object"])

        errors: List[str] = []
        kind = _require_string(entry, "sourceType", errors)
        identifier = _require_string(entry, "sourceIdent", errors)

        credential = entry.get("sourceAuth")
        if credential is None:
            credential = ""
        elif not isinstance(credential, str):
            errors.append("`sourceAuth` must be a string")

        exclude = entry.get("exclude")
        if exclude is None:
            exclude = []
        elif not isinstance(exclude, list) or not all(isinstance(n, str) for n in exclude):
            errors.append("`exclude` must be a list of strings")

        if errors:
            return DecodeResult(errors=errors)
        return DecodeResult(value=cls(
            kind=kind,
            identifier=identifier,
            credential=credential,
            exclude=frozenset(exclude),
        ))


@dataclass
class RepositoryCandidate:
    """A provider-reported repository before exclusion/validity filtering."""
    name: str
    archived: bool
    default_ref: Optional[str]
    clone_url: str
    id: Any  # provider-native identifier used by id-addressed file probes


@dataclass
class RepositoryRecord:
    """One entry of the manifest `repositories` list."""
    name: str
    url: str
    type: str = Constants.REPOSITORY_TYPE
    options: Any = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type, "url": self.url}
        if self.options is not None:
            data["options"] = self.options
        return data

    @classmethod
    def from_candidate(cls, candidate: RepositoryCandidate) -> "RepositoryRecord":
        return cls(name=candidate.name, url=candidate.clone_url)

    @classmethod
    def from_dict(cls, entry: Any) -> "DecodeResult[RepositoryRecord]":
        """Decode a statically declared repository entry.

        `type` and `url` are required; `name` is optional since Satis accepts
        anonymous repositories. `options` is kept untouched.
        """
        if not isinstance(entry, dict):
            return DecodeResult(errors=["repository entry must be an object"])

        errors: List[str] = []
        name = entry.get("name", "")
        if not isinstance(name, str):
            errors.append("`name` must be a string")
        repo_type = _require_string(entry, "type", errors)
        url = _require_string(entry, "url", errors)

        if errors:
            return DecodeResult(errors=errors)
        return DecodeResult(value=cls(
            name=name,
            url=url,
            type=repo_type,
            options=entry.get("options"),
        ))
