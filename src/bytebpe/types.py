"""
Core types for tokenization.
"""

from typing import TypeAlias

Token: TypeAlias = str
TokenId: TypeAlias = int
TokenPair: TypeAlias = tuple[Token, Token]
MergeRule: TypeAlias = tuple[Token, Token, Token]
MergeTable: TypeAlias = list[MergeRule]
