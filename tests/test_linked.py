from pyqueue.linked import LinkedList


def test_linked_from_iterable():
    l = LinkedList.from_iterable([1, 2, 3])
    assert list(l) == [1, 2, 3]
    assert len(l) == 3
    assert l.head == 1
    assert list(l.tail) == [2, 3]
    assert len(l.tail) == 2


def test_linked_cons_shares_tail():
    l1 = LinkedList.from_iterable([2, 3])
    l2 = l1.cons(1)
    l3 = l1.cons(0)
    assert list(l1) == [2, 3]
    assert list(l2) == [1, 2, 3]
    assert list(l3) == [0, 2, 3]


def test_linked_empty():
    l = LinkedList()
    assert len(l) == 0
    assert not l
    assert list(l) == []
    try:
        l.head
    except IndexError:
        pass
    else:
        assert False
    try:
        l.tail
    except IndexError:
        pass
    else:
        assert False


def test_linked_tail_to_empty():
    l = LinkedList().cons('x')
    assert l
    assert not l.tail
    assert len(l.tail) == 0


def test_linked_reverse():
    l = LinkedList.from_iterable([1, 2, 3])
    assert list(l.reverse()) == [3, 2, 1]
    assert list(l) == [1, 2, 3]
    assert list(LinkedList().reverse()) == []


def test_linked_split():
    l = LinkedList.from_iterable([1, 2, 3, 4])
    taken, rest = l.split(1)
    assert taken == [1]
    assert list(rest) == [2, 3, 4]
    assert len(rest) == 3

    taken, rest = l.split(4)
    assert taken == [1, 2, 3, 4]
    assert not rest

    taken, rest = l.split(0)
    assert taken == []
    assert list(rest) == [1, 2, 3, 4]


def test_linked_prepend_all():
    l = LinkedList.from_iterable([3])
    assert list(l.prepend_all([2, 1])) == [1, 2, 3]
    assert list(l) == [3]
    assert len(l.prepend_all([2, 1])) == 3


def test_linked_membership():
    l = LinkedList.from_iterable(['a', 'b'])
    assert 'a' in l
    assert 'c' not in l
