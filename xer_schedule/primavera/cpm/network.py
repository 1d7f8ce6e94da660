"""
Task Network for CPM calculations.

Manages tasks and relationships with predecessor/successor lookups,
topological sorting and network validation.
"""

from collections import defaultdict
from typing import Iterable, Optional

from ..models import Relationship, Task


class TaskNetwork:
    """
    Task dependency network for CPM calculations.

    Tasks are indexed by id (a later duplicate replaces an earlier one).
    Relationships are kept even when they reference unknown tasks; such
    edges simply never resolve. Relationships with a blank task id on
    either end are ignored.
    """

    def __init__(self):
        self.tasks: dict[str, Task] = {}
        self.relationships: list[Relationship] = []
        self._successors: dict[str, list[Relationship]] = defaultdict(list)
        self._predecessors: dict[str, list[Relationship]] = defaultdict(list)

    @classmethod
    def build(cls, tasks: Iterable[Task], relationships: Iterable[Relationship]) -> 'TaskNetwork':
        """Create a network from tasks and relationships."""
        network = cls()
        for task in tasks:
            network.add_task(task)
        for rel in relationships:
            network.add_relationship(rel)
        return network

    def add_task(self, task: Task) -> None:
        """Add a task to the network."""
        self.tasks[task.task_id] = task

    def add_relationship(self, rel: Relationship) -> bool:
        """
        Add a relationship to the network.

        Returns False if skipped because an endpoint id is blank.
        """
        if not rel.pred_task_id or not rel.task_id:
            return False
        self.relationships.append(rel)
        self._successors[rel.pred_task_id].append(rel)
        self._predecessors[rel.task_id].append(rel)
        return True

    def get_task(self, task_id: str) -> Optional[Task]:
        """Get a task by ID."""
        return self.tasks.get(task_id)

    def get_successors(self, task_id: str) -> list[Relationship]:
        """Get relationships where task_id is the predecessor."""
        return self._successors.get(task_id, [])

    def get_predecessors(self, task_id: str) -> list[Relationship]:
        """Get relationships where task_id is the successor."""
        return self._predecessors.get(task_id, [])

    def get_start_tasks(self) -> list[str]:
        """Get task IDs with no predecessors."""
        return [tid for tid in self.tasks if not self._predecessors.get(tid)]

    def get_end_tasks(self) -> list[str]:
        """Get task IDs with no successors."""
        return [tid for tid in self.tasks if not self._successors.get(tid)]

    def get_dangling_relationships(self) -> list[Relationship]:
        """Relationships referencing a task id that is not in the network."""
        return [
            rel for rel in self.relationships
            if rel.pred_task_id not in self.tasks or rel.task_id not in self.tasks
        ]

    def topological_sort(self) -> list[str]:
        """
        Return task IDs in topological order (predecessors before successors).

        Uses Kahn's algorithm. Raises ValueError if circular dependency detected.
        """
        # In-degree counts only edges between known tasks
        in_degree = {tid: 0 for tid in self.tasks}
        for rel in self.relationships:
            if rel.pred_task_id in self.tasks and rel.task_id in self.tasks:
                in_degree[rel.task_id] += 1

        queue = [tid for tid, deg in in_degree.items() if deg == 0]
        result = []

        while queue:
            task_id = queue.pop(0)
            result.append(task_id)

            for rel in self._successors.get(task_id, []):
                if rel.task_id not in in_degree:
                    continue
                in_degree[rel.task_id] -= 1
                if in_degree[rel.task_id] == 0:
                    queue.append(rel.task_id)

        if len(result) != len(self.tasks):
            ordered = set(result)
            remaining = [tid for tid in self.tasks if tid not in ordered]
            raise ValueError(f"Circular dependency detected involving {len(remaining)} tasks: "
                             f"{remaining[:5]}...")

        return result

    def reverse_topological_sort(self) -> list[str]:
        """Return task IDs in reverse topological order (successors before predecessors)."""
        return list(reversed(self.topological_sort()))

    def get_statistics(self) -> dict:
        """Get network statistics."""
        task_types = defaultdict(int)
        statuses = defaultdict(int)

        for task in self.tasks.values():
            task_types[task.task_type or 'unknown'] += 1
            statuses[task.status or 'unknown'] += 1

        return {
            'total_tasks': len(self.tasks),
            'total_relationships': len(self.relationships),
            'start_tasks': len(self.get_start_tasks()),
            'end_tasks': len(self.get_end_tasks()),
            'task_types': dict(task_types),
            'statuses': dict(statuses),
        }

    def validate(self) -> list[str]:
        """
        Validate network integrity.

        Returns list of issues found (empty if valid). Issues are
        informational; the CPM engine tolerates all of them.
        """
        issues = []

        dangling = self.get_dangling_relationships()
        if dangling:
            issues.append(f"{len(dangling)} relationships reference missing tasks")

        try:
            self.topological_sort()
        except ValueError as e:
            issues.append(str(e))

        undated = [t.task_id for t in self.tasks.values() if not t.has_dates()]
        if undated:
            issues.append(f"{len(undated)} tasks missing start or finish date")

        return issues

    def __len__(self) -> int:
        return len(self.tasks)

    def __contains__(self, task_id: str) -> bool:
        return task_id in self.tasks

    def __repr__(self) -> str:
        return f"TaskNetwork({len(self.tasks)} tasks, {len(self.relationships)} relationships)"
