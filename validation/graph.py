from typing import Dict, List, Set, Tuple


class TaskGraph:
    """
    Directed graph over task IDs with integer-indexed nodes.

    Nodes are added in first-seen order, so node indices (and therefore the cycles
    reported) are deterministic for a given rule list.
    """

    def __init__(self):
        self.labels: List[str] = []
        self.index: Dict[str, int] = {}
        self.adjacency: List[List[int]] = []
        self.edge_sources: Dict[Tuple[int, int], List[str]] = {}

    def add_node(self, label: str) -> int:
        if label not in self.index:
            self.index[label] = len(self.labels)
            self.labels.append(label)
            self.adjacency.append([])
        return self.index[label]

    def add_edge(self, src: str, dst: str, source_id: str = "") -> None:
        u, v = self.add_node(src), self.add_node(dst)
        if v not in self.adjacency[u]:
            self.adjacency[u].append(v)
        sources = self.edge_sources.setdefault((u, v), [])
        if source_id and source_id not in sources:
            sources.append(source_id)

    def find_cycles(self) -> List[List[int]]:
        """
        Depth-first search with recursion-stack tracking.

        Every back edge closes a cycle; each cycle is returned once, rotated to start
        at its smallest node index.
        """
        visited: Set[int] = set()
        on_stack: Set[int] = set()
        path: List[int] = []
        seen: Set[Tuple[int, ...]] = set()
        cycles: List[List[int]] = []

        def visit(u: int) -> None:
            visited.add(u)
            on_stack.add(u)
            path.append(u)
            for v in self.adjacency[u]:
                if v in on_stack:
                    cycle = path[path.index(v):]
                    start = cycle.index(min(cycle))
                    canonical = tuple(cycle[start:] + cycle[:start])
                    if canonical not in seen:
                        seen.add(canonical)
                        cycles.append(list(canonical))
                elif v not in visited:
                    visit(v)
            path.pop()
            on_stack.discard(u)

        for node in range(len(self.labels)):
            if node not in visited:
                visit(node)
        return cycles

    def cycle_sources(self, cycle: List[int]) -> List[str]:
        """Ids of the rules contributing the edges of a cycle, in edge order."""
        sources: List[str] = []
        for i, u in enumerate(cycle):
            v = cycle[(i + 1) % len(cycle)]
            for source in self.edge_sources.get((u, v), []):
                if source not in sources:
                    sources.append(source)
        return sources
