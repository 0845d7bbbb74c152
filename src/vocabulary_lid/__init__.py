"""Vocabulary LID.

Public API is intentionally small. Prefer `LanguageClassifier` + `Trainer` + `LidConfig` for SDK usage.
"""

from .alphabets import Alphabet, BlockAlphabet, LetterSetAlphabet, ScriptAlphabet
from .classifier import EPSILON, LanguageClassifier
from .config import LidConfig
from .datasets import DatasetLoadResult, load_csv_records, load_jsonl_records, load_records
from .errors import DatasetError, InvalidConfigError, InvalidWordError, LidError
from .languages import (
    Language,
    LanguageProfile,
    Segmentation,
    get_language_profile,
    language_for_name,
    supported_languages,
)
from .results import (
    ClassificationResult,
    LanguageObservation,
    ValidationObservation,
    ValidationReport,
    VocabularyDistribution,
    vocabulary_distribution,
)
from .tokenize import normalize_sample, normalize_word, split_words
from .training import LabeledRecord, Trainer
from .vocabulary import (
    AxiomEntry,
    InductionEntry,
    Vocabulary,
    VocabularyStore,
    WordEntry,
    WordKind,
    WordSnapshot,
)
from .weighting import MeanAdjustment, ThresholdMeanAdjustment, WeightPolicy, get_weight_policy

__all__ = [
    "Alphabet",
    "LetterSetAlphabet",
    "ScriptAlphabet",
    "BlockAlphabet",
    "Language",
    "LanguageProfile",
    "Segmentation",
    "get_language_profile",
    "language_for_name",
    "supported_languages",
    "normalize_sample",
    "normalize_word",
    "split_words",
    "WordKind",
    "WordEntry",
    "AxiomEntry",
    "InductionEntry",
    "WordSnapshot",
    "Vocabulary",
    "VocabularyStore",
    "WeightPolicy",
    "MeanAdjustment",
    "ThresholdMeanAdjustment",
    "get_weight_policy",
    "EPSILON",
    "LanguageClassifier",
    "LabeledRecord",
    "Trainer",
    "ClassificationResult",
    "LanguageObservation",
    "ValidationObservation",
    "ValidationReport",
    "VocabularyDistribution",
    "vocabulary_distribution",
    "DatasetLoadResult",
    "load_csv_records",
    "load_jsonl_records",
    "load_records",
    "LidConfig",
    "LidError",
    "InvalidConfigError",
    "InvalidWordError",
    "DatasetError",
]

__version__ = "0.1.0"
