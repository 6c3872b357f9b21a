"""Tests for priority queue (Fibonacci heap) implementation."""

import random

import pytest
from fibheap.fibheap import InvalidKeyError
from fibheap.pqueue import Entry, PriorityQueue


class TestEntry:
    """Test cases for Entry class."""

    def test_create_entry(self):
        """Test creating an entry."""
        e = Entry("a", 3)
        assert e.item == "a"
        assert e.priority == 3
        assert "a" in repr(e)


class TestPriorityQueue:
    """Test cases for PriorityQueue class."""

    def test_create_empty_queue(self):
        """Test creating an empty queue."""
        pq = PriorityQueue()
        assert pq.empty()
        assert pq.count() == 0
        assert len(pq) == 0
        assert pq.top() is None

    def test_push_and_top(self):
        """Test push and top operations."""
        pq = PriorityQueue()

        pq.push("a", 5)
        assert pq.top() == ("a", 5)
        assert pq.count() == 1

        pq.push("b", 3)
        assert pq.top() == ("b", 3)
        assert pq.count() == 2

        pq.push("c", 10)
        assert pq.top() == ("b", 3)
        assert pq.count() == 3

    def test_push_duplicate(self):
        """Test pushing an item that is already queued."""
        pq = PriorityQueue()
        pq.push("a", 1)
        with pytest.raises(ValueError):
            pq.push("a", 2)
        assert pq.count() == 1

    def test_pop(self):
        """Test pop operation."""
        pq = PriorityQueue()
        for item, p in [("e", 5), ("c", 3), ("j", 10), ("a", 1), ("g", 7)]:
            pq.push(item, p)

        assert pq.pop() == ("a", 1)
        assert pq.pop() == ("c", 3)
        assert pq.pop() == ("e", 5)
        assert pq.pop() == ("g", 7)
        assert pq.pop() == ("j", 10)
        assert pq.empty()

    def test_pop_empty(self):
        """Test popping from empty queue."""
        pq = PriorityQueue()
        assert pq.pop() is None

    def test_popped_item_can_be_pushed_again(self):
        """Test that popping forgets the item."""
        pq = PriorityQueue()
        pq.push("a", 1)
        pq.pop()
        assert "a" not in pq
        pq.push("a", 2)
        assert pq.top() == ("a", 2)

    def test_custom_comparison(self):
        """Test queue with custom comparison (max heap)."""
        pq = PriorityQueue(lambda a, b: a > b)
        for i, p in enumerate([5, 3, 10, 1, 7]):
            pq.push(i, p)

        assert pq.pop() == (2, 10)
        assert pq.pop() == (4, 7)
        assert pq.pop() == (0, 5)

    def test_reduce_key(self):
        """Test reduce key operation."""
        pq = PriorityQueue()
        pq.push("x", 10)
        pq.push("y", 5)
        pq.push("z", 15)

        assert pq.top() == ("y", 5)

        pq.reduce_key("x", 2)

        assert pq.top() == ("x", 2)
        assert pq.priority("x") == 2
        assert pq.is_heap()

    def test_reduce_key_unknown_item(self):
        """Test reducing the key of an item that is not queued."""
        pq = PriorityQueue()
        pq.push("x", 1)
        with pytest.raises(KeyError):
            pq.reduce_key("y", 0)

    def test_reduce_key_increase(self):
        """Test that increasing a priority is rejected."""
        pq = PriorityQueue()
        pq.push("x", 1)
        with pytest.raises(InvalidKeyError):
            pq.reduce_key("x", 2)
        assert pq.priority("x") == 1

    def test_remove(self):
        """Test removing an item from the middle of the queue."""
        pq = PriorityQueue()
        for i in range(10):
            pq.push(i, i)
        pq.pop()

        pq.remove(5)

        assert 5 not in pq
        assert pq.count() == 8
        assert pq.is_heap()
        popped = [pq.pop()[0] for _ in range(8)]
        assert popped == [1, 2, 3, 4, 6, 7, 8, 9]

    def test_remove_unknown_item(self):
        """Test removing an item that is not queued."""
        pq = PriorityQueue()
        with pytest.raises(KeyError):
            pq.remove("missing")

    def test_priority_unknown_item(self):
        """Test reading the priority of an item that is not queued."""
        pq = PriorityQueue()
        with pytest.raises(KeyError):
            pq.priority("missing")

    def test_contains(self):
        """Test membership."""
        pq = PriorityQueue()
        pq.push("a", 1)
        assert "a" in pq
        assert "b" not in pq

    def test_for_each(self):
        """Test forEach iteration."""
        pq = PriorityQueue()
        for i, p in enumerate([5, 3, 10, 1, 7]):
            pq.push(i, p)

        elements = []
        pq.for_each(lambda item, priority: elements.append((item, priority)))

        assert sorted(elements) == [(0, 5), (1, 3), (2, 10), (3, 1), (4, 7)]

    def test_to_string(self):
        """Test string representation."""
        pq = PriorityQueue()
        pq.push("a", 5)
        pq.push("b", 3)
        pq.push("c", 10)

        s = pq.to_string(lambda item, priority: f"{item}:{priority}")
        assert s.startswith("b:3")  # Minimum comes first
        assert "a:5" in s
        assert "c:10" in s

    def test_large_dataset(self):
        """Test with larger dataset."""
        rng = random.Random(3)
        pq = PriorityQueue()

        numbers = [rng.randint(1, 1000) for _ in range(100)]
        for i, n in enumerate(numbers):
            pq.push(i, n)

        assert pq.count() == 100
        assert pq.is_heap()

        for i in rng.sample(range(100), 30):
            numbers[i] -= rng.randint(0, 500)
            pq.reduce_key(i, numbers[i])
        assert pq.is_heap()

        for expected in sorted(numbers):
            assert pq.pop()[1] == expected

        assert pq.empty()
