from typing import Hashable, Iterable, TypeVar

T = TypeVar("T", bound=Hashable)


def unique(values: Iterable[T]) -> list[T]:
    """Drop repeated values, keeping the first occurrence of each

    :param values: Values that may contain duplicates
    :return: List of distinct values in first-seen order
    """
    return list(dict.fromkeys(values))
