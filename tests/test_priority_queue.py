"""
Testy dla kolejki priorytetowej (open set A*).
"""

from hexpath.core.priority_queue import PriorityQueue


def same(a, b):
    return a == b


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ENQUEUE / DEQUEUE
# ═══════════════════════════════════════════════════════════════════════════

def test_dequeue_returns_lowest_priority_first():
    """Elementy zdejmowane są rosnąco po priorytecie."""
    pq = PriorityQueue()
    pq.enqueue("c", 5)
    pq.enqueue("a", 1)
    pq.enqueue("b", 3)

    assert [pq.dequeue(), pq.dequeue(), pq.dequeue()] == ["a", "b", "c"]


def test_ties_are_fifo():
    """Remis priorytetów - kolejność wstawienia."""
    pq = PriorityQueue()
    for item in ["first", "second", "third"]:
        pq.enqueue(item, 2)

    assert [pq.dequeue() for _ in range(3)] == ["first", "second", "third"]


def test_dequeue_empty_returns_none():
    """Pusta kolejka zwraca None zamiast rzucać."""
    pq = PriorityQueue()
    assert pq.is_empty()
    assert pq.dequeue() is None


def test_len_tracks_entries():
    pq = PriorityQueue()
    pq.enqueue("a", 1)
    pq.enqueue("b", 1)
    assert len(pq) == 2
    pq.dequeue()
    assert len(pq) == 1
    assert not pq.is_empty()


def test_items_are_never_compared():
    """Elementy bez porządku (dict) nie psują heapa przy remisach."""
    pq = PriorityQueue()
    pq.enqueue({"id": 1}, 0)
    pq.enqueue({"id": 2}, 0)
    assert pq.dequeue() == {"id": 1}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: UPDATE PRIORITY
# ═══════════════════════════════════════════════════════════════════════════

def test_update_priority_moves_item_forward():
    """Obniżenie priorytetu przesuwa element na początek."""
    pq = PriorityQueue()
    pq.enqueue("a", 5)
    pq.enqueue("b", 3)

    pq.update_priority("a", 1, same)

    assert len(pq) == 2
    assert pq.dequeue() == "a"
    assert pq.dequeue() == "b"


def test_update_priority_acts_as_reinsert_for_ties():
    """Zaktualizowany wpis dostaje nowy numer kolejności."""
    pq = PriorityQueue()
    pq.enqueue("x", 1)
    pq.enqueue("y", 1)

    pq.update_priority("x", 1, same)

    assert pq.dequeue() == "y"
    assert pq.dequeue() == "x"


def test_update_priority_missing_item_enqueues():
    """Brak dopasowania - element jest dodawany."""
    pq = PriorityQueue()
    pq.enqueue("a", 2)

    pq.update_priority("z", 1, same)

    assert len(pq) == 2
    assert pq.dequeue() == "z"


def test_update_priority_uses_predicate():
    """Dopasowanie po predykacie, nie po tożsamości obiektu."""
    pq = PriorityQueue()
    pq.enqueue(("pos", 10), 10)
    pq.enqueue(("other", 4), 4)

    pq.update_priority(("pos", 2), 2, lambda a, b: a[0] == b[0])

    assert len(pq) == 2
    assert pq.dequeue() == ("pos", 2)
