"""Core analysis components.

This module exports the main analysis classes:
- analyze / LintEngine: One complete pass over a buffer
- Tokenizer: Delimiter balance and string state tracking
- PatternDispatcher: Per-language rules, typo and terminator checks
- CorrectionSynthesizer: Safe lexical substitutions
- EditorSession: Debounced live analysis for one editor buffer
"""

from livelint.core.dispatcher import PatternDispatcher
from livelint.core.engine import LintEngine, analyze
from livelint.core.language_detector import detect_language
from livelint.core.rules import DEFAULT_RULES, RuleSet
from livelint.core.session import EditorSession, SessionState
from livelint.core.synthesizer import CorrectionSynthesizer
from livelint.core.tokenizer import Tokenizer

__all__ = [
    "DEFAULT_RULES",
    "CorrectionSynthesizer",
    "EditorSession",
    "LintEngine",
    "PatternDispatcher",
    "RuleSet",
    "SessionState",
    "Tokenizer",
    "analyze",
    "detect_language",
]
