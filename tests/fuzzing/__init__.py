"""Fuzz testing for the mal reader."""

from .fuzz_reader import FuzzRunner, ReaderFuzzer

__all__ = ["FuzzRunner", "ReaderFuzzer"]
