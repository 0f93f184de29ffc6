# cg2d/bvh.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from .geom import Bbox, Pt

LEAF_SIZE = 32
MAX_DEPTH = 20

Elem = Tuple[int, Bbox]


@dataclass
class Node:
    """
    Вузол квадродерева.
    big: елементи, чий bbox повністю накриває вузол (далі вниз не йдуть);
    elems: решта елементів листа; children: 4 квадранти для гілки (або None).
    Частково перекриваючий елемент зберігається в усіх листах, з якими перетинається.
    """
    bbox: Bbox
    depth: int = 0
    big: List[Elem] = field(default_factory=list)
    elems: List[Elem] = field(default_factory=list)
    children: Optional[List["Node"]] = None

    def insert(self, e: int, e_bbox: Bbox) -> None:
        if e_bbox.covers(self.bbox):
            self.big.append((e, e_bbox))
            return
        if self.children is not None:
            for child in self.children:
                if child.bbox.intersects(e_bbox):
                    child.insert(e, e_bbox)
            return
        self.elems.append((e, e_bbox))
        if len(self.elems) > LEAF_SIZE and self.depth < MAX_DEPTH:
            self._split()

    def _split(self) -> None:
        self.children = [Node(q, self.depth + 1) for q in self.bbox.split(self.bbox.center)]
        elems, self.elems = self.elems, []
        for e, e_bbox in elems:
            for child in self.children:
                if child.bbox.intersects(e_bbox):
                    child.insert(e, e_bbox)

    def remove(self, e: int, e_bbox: Bbox) -> None:
        if e_bbox.covers(self.bbox):
            self.big = [(ee, bb) for (ee, bb) in self.big if ee != e]
            return
        if self.children is None:
            self.elems = [(ee, bb) for (ee, bb) in self.elems if ee != e]
            return
        for child in self.children:
            if child.bbox.intersects(e_bbox):
                child.remove(e, e_bbox)

    def depth_below(self) -> int:
        if self.children is None:
            return 1
        return 1 + max(c.depth_below() for c in self.children)


class Bvh:
    """
    Просторовий індекс прямокутників (квадродерево над фіксованою областю).
    Використовується для пошуку трикутників, чиє описане коло може містити точку.
    Точки поза областю нічого не знаходять.
    """

    def __init__(self, bbox: Bbox):
        self.root = Node(bbox)
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def depth(self) -> int:
        return self.root.depth_below()

    def insert(self, e: int, e_bbox: Bbox) -> None:
        self.root.insert(e, e_bbox)
        self._count += 1

    def remove(self, e: int, e_bbox: Bbox) -> None:
        self.root.remove(e, e_bbox)
        self._count -= 1

    def enclosing(self, p: Pt) -> Iterator[int]:
        """Id елементів, чий bbox містить p (кожен один раз)."""
        seen: Set[int] = set()
        stack = [self.root]
        while stack:
            node = stack.pop()
            if not node.bbox.contains(p):
                continue
            found = node.big if node.children is not None else node.big + node.elems
            for e, e_bbox in found:
                if e not in seen and e_bbox.contains(p):
                    seen.add(e)
                    yield e
            if node.children is not None:
                stack.extend(node.children)
