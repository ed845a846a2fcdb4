"""Core data models: analyzed entities, the dependency graph, and selection policies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Union

NAMESPACE_SEPARATOR = "."


class SymbolKind(Enum):
    CLASS = "Class"
    INTERFACE = "Interface"
    ABSTRACT_CLASS = "AbstractClass"
    STRUCT = "Struct"
    ENUM = "Enum"
    DELEGATE = "Delegate"
    INTERFACE_IMPLEMENTING_CLASS = "InterfaceImplementingClass"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, text: Optional[str]) -> "SymbolKind":
        """Map an analyzer spelling (``AbstractClass``, ``abstract_class``...) to a kind."""
        if not text:
            return cls.UNKNOWN
        key = str(text).replace("_", "").replace(" ", "").lower()
        for kind in cls:
            if kind.value.lower() == key:
                return kind
        return cls.UNKNOWN


@dataclass
class ClassEntity:
    name: str
    kind: SymbolKind = SymbolKind.CLASS
    fields: List[str] = field(default_factory=list)
    methods: List[str] = field(default_factory=list)
    summary: str = ""
    dependencies: Set[str] = field(default_factory=set)
    dependents: Set[str] = field(default_factory=set)

    @property
    def short_name(self) -> str:
        return self.name.split(NAMESPACE_SEPARATOR)[-1]


class EntityGraph:
    """Arena of entities keyed by fully qualified name.

    Edges are stored as sets of keys on both endpoints, so the graph never
    holds object cycles and can be copied or serialized trivially. Only
    :func:`classdep_cli.linker.link` is expected to add edges.
    """

    def __init__(self, entities: Iterable[ClassEntity] = ()):
        self._entities: Dict[str, ClassEntity] = {}
        for entity in entities:
            self.add(entity)

    def add(self, entity: ClassEntity) -> None:
        self._entities[entity.name] = entity

    def get(self, name: str) -> Optional[ClassEntity]:
        return self._entities.get(name)

    def __getitem__(self, name: str) -> ClassEntity:
        return self._entities[name]

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def names(self) -> List[str]:
        return sorted(self._entities)

    def entities(self) -> List[ClassEntity]:
        return [self._entities[name] for name in self.names()]

    def dependencies_of(self, name: str) -> Set[str]:
        entity = self._entities.get(name)
        return set(entity.dependencies) if entity else set()

    def dependents_of(self, name: str) -> Set[str]:
        entity = self._entities.get(name)
        return set(entity.dependents) if entity else set()

    def edge_count(self) -> int:
        return sum(len(e.dependencies) for e in self._entities.values())


@dataclass(frozen=True)
class ExplicitSelection:
    """Display exactly the named classes that exist in the graph."""

    names: FrozenSet[str]
    show_summary: bool = False
    show_members: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", frozenset(self.names))


@dataclass(frozen=True)
class DistanceSelection:
    """Display a root class plus everything within N hops in each direction."""

    root: str
    forward_distance: int = 1
    backward_distance: int = 0
    show_summary: bool = False
    show_members: bool = True

    def __post_init__(self) -> None:
        if self.forward_distance < 0 or self.backward_distance < 0:
            raise ValueError("Traversal distances must be non-negative.")


DisplayPolicy = Union[ExplicitSelection, DistanceSelection]


def root_of(policy: DisplayPolicy) -> Optional[str]:
    """Return the highlighted root for distance policies, ``None`` otherwise."""
    if isinstance(policy, DistanceSelection):
        return policy.root
    return None


@dataclass
class GenerationResult:
    output_path: str
    class_count: int
    edge_count: int
    root: Optional[str] = None
