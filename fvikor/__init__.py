# -*- coding: utf-8 -*-
"""
fvikor: Fuzzy VIKOR for Group Decisions
=======================================

Ranks alternatives from linguistic expert judgments with Fuzzy VIKOR.

Pipeline
--------
  1. Linguistic judgments -> triangular fuzzy numbers
  2. Expert aggregation (min l, mean m, max u)
  3. Fuzzy best (f*) and worst (f°) values
  4. Normalized fuzzy differences
  5. Fuzzy S (group utility) and R (individual regret)
  6. Fuzzy Q (compromise index)
  7. Defuzzification
  8. Rankings by S, R and Q
  9. Acceptance conditions and compromise set

Package Structure
-----------------
fvikor/
├── config.py           # Package and problem configuration
├── logger.py           # Logging setup and run reporting
├── data_loader.py      # Judgment matrices, resizing, example problem
├── pipeline.py         # calculate() boundary, DecisionSession
├── mcdm/
│   ├── fuzzy_base.py   # TriangularFuzzyNumber and arithmetic
│   ├── linguistic.py   # Term sets, validation, dictionaries
│   └── fuzzy_vikor.py  # Fuzzy VIKOR steps and result
└── analysis/
    └── sensitivity.py  # v sensitivity

Quick Start
-----------
>>> from fvikor import example_session
>>> session = example_session()
>>> result = session.run()
>>> print(result.summary())
"""

from .config import (
    Config, VIKORConfig, LoggingConfig, ProblemConfig,
    ConfigurationError,
    get_default_config, get_config, set_config, reset_config,
)
from .logger import (
    setup_logger,
    setup_from_config,
    get_logger,
    get_module_logger,
    PipelineLogger,
    LoggerFactory,
    log_exceptions,
    timed_operation,
)
from .data_loader import (
    JudgmentMatrices, DecisionInputs,
    resize_labels, resize_flags, resize_2d, resize_3d, resize_inputs,
    load_inputs, example_inputs,
)
from .pipeline import (
    calculate, calculate_inputs, CalculationError,
    DecisionSession, example_session,
)
from .mcdm import (
    TriangularFuzzyNumber, LinguisticTerm, TermSet, TermDictionaries,
    TermValidationError, validate_terms, save_terms,
    FuzzyVIKOR, FuzzyVIKORResult, RankedAlternative,
)
from .analysis import VSensitivityAnalysis, VSensitivityResult

__version__ = '1.0.0'

__all__ = [
    # Configuration
    'Config',
    'VIKORConfig',
    'LoggingConfig',
    'ProblemConfig',
    'ConfigurationError',
    'get_default_config',
    'get_config',
    'set_config',
    'reset_config',

    # Logging
    'setup_logger',
    'setup_from_config',
    'get_logger',
    'get_module_logger',
    'PipelineLogger',
    'LoggerFactory',
    'log_exceptions',
    'timed_operation',

    # Inputs
    'JudgmentMatrices',
    'DecisionInputs',
    'resize_labels',
    'resize_flags',
    'resize_2d',
    'resize_3d',
    'resize_inputs',
    'load_inputs',
    'example_inputs',

    # Calculation
    'calculate',
    'calculate_inputs',
    'CalculationError',
    'DecisionSession',
    'example_session',

    # Method
    'TriangularFuzzyNumber',
    'LinguisticTerm',
    'TermSet',
    'TermDictionaries',
    'TermValidationError',
    'validate_terms',
    'save_terms',
    'FuzzyVIKOR',
    'FuzzyVIKORResult',
    'RankedAlternative',

    # Analysis
    'VSensitivityAnalysis',
    'VSensitivityResult',
]
