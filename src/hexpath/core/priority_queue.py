"""
Kolejka priorytetowa (min-heap) z aktualizacją priorytetu.

Używana przez A* jako "open set":
    - enqueue(item, priority)   - dodaj element
    - dequeue()                 - zdejmij element o NAJNIŻSZYM priorytecie
    - update_priority(...)      - przenieś istniejący element na nowy priorytet

Determinizm:
    Remisy priorytetów rozstrzygane są kolejnością wstawienia (FIFO).
    Każdy wpis dostaje rosnący numer sekwencyjny, więc heap porównuje
    krotki (priority, seq) i nigdy nie porównuje samych elementów.
    Element z zaktualizowanym priorytetem dostaje NOWY numer - zachowuje
    się jak ponownie wstawiony.

Przykład:
    >>> pq = PriorityQueue()
    >>> pq.enqueue("a", 3)
    >>> pq.enqueue("b", 1)
    >>> pq.enqueue("c", 1)
    >>> pq.dequeue(), pq.dequeue(), pq.dequeue()
    ('b', 'c', 'a')
    >>> pq.dequeue() is None
    True
"""

from __future__ import annotations
import heapq
from itertools import count
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

T = TypeVar('T')


class PriorityQueue(Generic[T]):
    """
    Min-priority queue oparta o heapq.

    Attributes:
        _heap (List[Tuple[float, int, T]]): Wpisy (priority, seq, item)
        _counter: Generator numerów sekwencyjnych
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[float, int, T]] = []
        self._counter = count()

    def enqueue(self, item: T, priority: float) -> None:
        """Dodaje element z podanym priorytetem."""
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def dequeue(self) -> Optional[T]:
        """
        Zdejmuje element o najniższym priorytecie.

        Returns:
            Optional[T]: Element lub None gdy kolejka pusta
        """
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def is_empty(self) -> bool:
        return not self._heap

    def update_priority(
        self,
        item: T,
        new_priority: float,
        equals: Callable[[T, T], bool],
    ) -> None:
        """
        Przenosi istniejący wpis na nowy priorytet.

        Wpis wyszukiwany jest predykatem `equals` (nie po tożsamości),
        więc A* może dopasować węzeł po samej pozycji hexa.
        Jeśli żaden wpis nie pasuje - element jest po prostu dodawany.

        Koszt: O(n) na wywołanie (liniowe wyszukanie wpisu + heapify).

        Args:
            item: Element z nowymi danymi
            new_priority: Nowy priorytet
            equals: Predykat (istniejący, nowy) -> bool
        """
        for index, (_, _, existing) in enumerate(self._heap):
            if equals(existing, item):
                self._heap[index] = (new_priority, next(self._counter), item)
                heapq.heapify(self._heap)
                return
        self.enqueue(item, new_priority)

    def __len__(self) -> int:
        return len(self._heap)
