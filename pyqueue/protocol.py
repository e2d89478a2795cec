from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union


T = TypeVar('T')
A = TypeVar('A')
S = TypeVar('S')

_logger = logging.getLogger(__name__)


# exceptions

class ProtocolError(TypeError):
    pass


# instructions, sent by the consumer of a reduction

@dataclass(frozen=True)
class Cont(Generic[A]):
    value: A


@dataclass(frozen=True)
class Halt(Generic[A]):
    value: A


@dataclass(frozen=True)
class Suspend(Generic[A]):
    value: A


Instruction = Union[Cont[A], Halt[A], Suspend[A]]


# results, returned by the producer of a reduction

@dataclass(frozen=True)
class Done(Generic[A]):
    acc: A


@dataclass(frozen=True)
class Halted(Generic[A]):
    acc: A


@dataclass(frozen=True, eq=False)
class Suspended(Generic[A]):
    acc: A
    resume: Callable[[Instruction[A]], Result[A]]


Result = Union[Done[A], Halted[A], Suspended[A]]

Reducer = Callable[[Any, A], Instruction[A]]


# collector commands, besides Cont(elem)

class _Command:
    def __init__(self, name: str):
        self._name = name

    def __repr__(self):
        return self._name


DONE = _Command('DONE')
HALT = _Command('HALT')

# returned by a collector told to HALT, never a valid accumulator
ABORTED = _Command('ABORTED')

Collector = Callable[[Any, Union[Cont[Any], _Command]], Any]


# capabilities

class Enumerable(ABC, Generic[T]):
    def is_enumerable(self) -> bool:
        return True

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def contains(self, value: Any) -> bool:
        pass

    @abstractmethod
    def slice(self) -> Optional[Callable[[int, int], List[T]]]:
        ''' return a slicing function, or None when slicing needs a full traversal
        '''
        pass

    @abstractmethod
    def reduce(self, instruction: Instruction[A], fun: Reducer[A]) -> Result[A]:
        pass


class Collectable(ABC, Generic[T]):
    def is_collectable(self) -> bool:
        return True

    @abstractmethod
    def into(self) -> Tuple[Any, Collector]:
        pass


def reduce_steps(step: Callable[[S], Optional[Tuple[Any, S]]], state: S,
                 instruction: Instruction[A], fun: Reducer[A]) -> Result[A]:
    ''' Drive `fun` over the elements produced by `step`.

    `step(state)` returns None once exhausted, else (elem, next_state).
    States are never modified, so a suspended reduction resumes from the
    exact state it paused at.
    '''
    while True:
        if isinstance(instruction, Halt):
            return Halted(instruction.value)

        if isinstance(instruction, Suspend):
            paused = state

            def resume(next_instruction: Instruction[A]) -> Result[A]:
                return reduce_steps(step, paused, next_instruction, fun)

            return Suspended(instruction.value, resume)

        if not isinstance(instruction, Cont):
            raise TypeError(f'unsupported instruction {instruction!r}')

        nxt = step(state)
        if nxt is None:
            return Done(instruction.value)
        elem, state = nxt
        instruction = fun(elem, instruction.value)


def collector_for(put: Callable[[Any, Any], Any]) -> Collector:
    ''' build a collector that feeds each element to `put(acc, elem)`
    '''
    def collector(acc: Any, command: Union[Cont[Any], _Command]) -> Any:
        if isinstance(command, Cont):
            return put(acc, command.value)
        if command is DONE:
            return acc
        if command is HALT:
            _logger.debug('collect halted, discarding %r', acc)
            return ABORTED
        raise TypeError(f'unsupported collect command {command!r}')

    return collector


# plain python values

class _SequenceEnumerable(Enumerable[T]):
    def __init__(self, items: Iterable[T]):
        self._items: Tuple[T, ...] = tuple(items)

    def count(self) -> int:
        return len(self._items)

    def contains(self, value: Any) -> bool:
        return value in self._items

    def slice(self) -> Optional[Callable[[int, int], List[T]]]:
        return lambda start, length: list(self._items[start:start + length])

    def reduce(self, instruction: Instruction[A], fun: Reducer[A]) -> Result[A]:
        return reduce_steps(self._step, 0, instruction, fun)

    def _step(self, index: int) -> Optional[Tuple[T, int]]:
        if index >= len(self._items):
            return None
        return self._items[index], index + 1


class _ListCollectable(Collectable[T]):
    def __init__(self, items: List[T]):
        self._items = items

    def into(self) -> Tuple[Any, Collector]:
        def put(acc: List[T], elem: T) -> List[T]:
            acc.append(elem)
            return acc

        return list(self._items), collector_for(put)


def enumerable_of(value: Any) -> Enumerable[Any]:
    if isinstance(value, Enumerable):
        if not value.is_enumerable():
            raise ProtocolError(f'{type(value).__name__} does not implement Enumerable')
        return value
    if isinstance(value, (str, bytes)) or not hasattr(value, '__iter__'):
        raise ProtocolError(f'{type(value).__name__} does not implement Enumerable')
    return _SequenceEnumerable(value)


def collectable_of(value: Any) -> Collectable[Any]:
    if isinstance(value, Collectable):
        if not value.is_collectable():
            raise ProtocolError(f'{type(value).__name__} does not implement Collectable')
        return value
    if isinstance(value, list):
        return _ListCollectable(value)
    raise ProtocolError(f'{type(value).__name__} does not implement Collectable')


# generic drivers

def reduce(source: Any, acc: A, fun: Callable[[Any, A], A]) -> A:
    result = enumerable_of(source).reduce(Cont(acc), lambda elem, a: Cont(fun(elem, a)))
    return result.acc


def reduce_while(source: Any, acc: A, fun: Reducer[A]) -> A:
    ''' like reduce, but `fun` returns Cont(acc) to go on or Halt(acc) to stop
    '''
    result = enumerable_of(source).reduce(Cont(acc), fun)
    return result.acc


def to_list(source: Any) -> List[Any]:
    def put(elem: Any, acc: List[Any]) -> List[Any]:
        acc.append(elem)
        return acc

    return reduce(source, [], put)


def map(source: Any, fun: Callable[[Any], Any]) -> List[Any]:
    def put(elem: Any, acc: List[Any]) -> List[Any]:
        acc.append(fun(elem))
        return acc

    return reduce(source, [], put)


def take(source: Any, n: int) -> List[Any]:
    if n <= 0:
        return []

    def put(elem: Any, acc: List[Any]) -> Instruction[List[Any]]:
        acc.append(elem)
        if len(acc) >= n:
            return Halt(acc)
        return Cont(acc)

    return reduce_while(source, [], put)


def count(source: Any) -> int:
    return enumerable_of(source).count()


def member(source: Any, value: Any) -> bool:
    return enumerable_of(source).contains(value)


def sort(source: Any, key: Optional[Callable[[Any], Any]] = None, reverse: bool = False) -> List[Any]:
    return sorted(to_list(source), key=key, reverse=reverse)


def iterate(source: Any) -> Iterator[Any]:
    ''' Lazily yield the elements of `source`, pausing the reduction after
    every element. Closing the generator simply drops the continuation.
    '''
    result = enumerable_of(source).reduce(Cont(None), lambda elem, _: Suspend(elem))
    while isinstance(result, Suspended):
        yield result.acc
        result = result.resume(Cont(None))


def into(source: Any, target: Any) -> Any:
    ''' Feed every element of `source` into `target` and return the collected
    value. If the source raises part way through, the collector is told to
    HALT before the error propagates.
    '''
    initial, collector = collectable_of(target).into()
    producer = enumerable_of(source)
    last = [initial]

    def put(elem: Any, acc: Any) -> Cont[Any]:
        last[0] = collector(acc, Cont(elem))
        return Cont(last[0])

    try:
        result = producer.reduce(Cont(initial), put)
    except Exception:
        collector(last[0], HALT)
        raise
    return collector(result.acc, DONE)
