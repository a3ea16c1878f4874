"""
Execution strategies for the per-element work of the pipeline.

Graph construction, similarity rows and sentence scoring are pure functions
of their inputs, so they can be mapped over a thread pool. Folds stay serial.
SequentialStrategy runs the same code path in the calling thread, which keeps
tests deterministic.

    with make_strategy(4) as strategy:
        graphs = list(strategy.map(creator.get_graph, sentences))
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterator, List, TypeVar

T = TypeVar('T')
R = TypeVar('R')

class ExecutorStrategy(ABC):
    max_workers: int

    @abstractmethod
    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        pass

    @abstractmethod
    def map(self, fn: Callable[[T], R], items: List[T]) -> Iterator[R]:
        """Results come back in submission order."""
        pass

    @abstractmethod
    def shutdown(self, wait: bool = True) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)
        return False

class ThreadPoolStrategy(ExecutorStrategy):
    def __init__(self, max_workers: int = 4):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="ngram")
        self.max_workers = max_workers

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        return self._executor.submit(fn, item)

    def map(self, fn: Callable[[T], R], items: List[T]) -> Iterator[R]:
        return self._executor.map(fn, items)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

class SequentialStrategy(ExecutorStrategy):
    def __init__(self):
        self.max_workers = 1

    def submit(self, fn: Callable[[T], R], item: T) -> Future:
        # run now, hand back an already completed future
        future: Future = Future()
        try:
            future.set_result(fn(item))
        except Exception as e:
            future.set_exception(e)
        return future

    def map(self, fn: Callable[[T], R], items: List[T]) -> Iterator[R]:
        for item in items:
            yield fn(item)

    def shutdown(self, wait: bool = True) -> None:
        pass

def make_strategy(num_partitions: int) -> ExecutorStrategy:
    if num_partitions <= 1:
        return SequentialStrategy()
    return ThreadPoolStrategy(max_workers=num_partitions)
