# _*_ coding: utf-8 _*_
"""Blob 이름 와일드카드 매칭."""
import re
from typing import Iterable, List, Pattern


def glob_to_regex(pattern: str) -> Pattern[str]:
    """
    와일드카드 패턴을 전체 일치 정규식으로 변환합니다.

    `*` 는 0개 이상의 임의 문자, `?` 는 정확히 1개 문자, 나머지는 모두
    문자 그대로 비교합니다. 대소문자는 구분하지 않습니다.
    """
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def blob_name_matches(name: str, pattern: str) -> bool:
    return glob_to_regex(pattern).fullmatch(name) is not None


def filter_blob_names(names: Iterable[str], pattern: str) -> List[str]:
    """목록 순서를 유지한 채 패턴에 맞는 이름만 반환"""
    regex = glob_to_regex(pattern)
    return [name for name in names if regex.fullmatch(name) is not None]
