from __future__ import annotations
from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar


T = TypeVar('T')


class LinkedNode(Generic[T]):
    __slots__ = ('val', 'next')

    def __init__(self, val: T, next: Optional[LinkedNode[T]]):
        self.val: T = val
        self.next: Optional[LinkedNode[T]] = next


class LinkedList(Generic[T]):
    ''' Persistent singly linked list. Never modified after construction,
    so tails are shared freely between lists.
    '''
    __slots__ = ('_head', '_count')

    def __init__(self, head: Optional[LinkedNode[T]] = None, count: int = 0):
        self._head: Optional[LinkedNode[T]] = head
        self._count: int = count


    @classmethod
    def from_iterable(cls, items: Iterable[T]) -> LinkedList[T]:
        ''' the first item of `items` becomes the head
        '''
        result: LinkedList[T] = _empty
        for x in reversed(list(items)):
            result = result.cons(x)
        return result


    def cons(self, x: T) -> LinkedList[T]:
        return LinkedList(LinkedNode(x, self._head), self._count + 1)


    @property
    def head(self) -> T:
        if self._head is None:
            raise IndexError('head of an empty LinkedList')
        return self._head.val


    @property
    def tail(self) -> LinkedList[T]:
        if self._head is None:
            raise IndexError('tail of an empty LinkedList')
        if self._count == 1:
            return _empty
        return LinkedList(self._head.next, self._count - 1)


    def reverse(self) -> LinkedList[T]:
        result: LinkedList[T] = _empty
        for x in self:
            result = result.cons(x)
        return result


    def split(self, n: int) -> Tuple[List[T], LinkedList[T]]:
        ''' return (first n values, rest) where rest shares nodes with self
        '''
        taken: List[T] = []
        node = self._head
        while node is not None and len(taken) < n:
            taken.append(node.val)
            node = node.next
        if node is None:
            return taken, _empty
        return taken, LinkedList(node, self._count - len(taken))


    def prepend_all(self, items: Iterable[T]) -> LinkedList[T]:
        ''' cons every item in turn, so the last item becomes the head
        '''
        result = self
        for x in items:
            result = result.cons(x)
        return result


    def __len__(self):
        return self._count


    def __bool__(self):
        return self._count > 0


    def __iter__(self) -> Iterator[T]:
        node = self._head
        while node is not None:
            yield node.val
            node = node.next


    def __repr__(self):
        return f'LinkedList({list(self)!r})'


_empty: LinkedList = LinkedList()
