#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Fuzzy VIKOR - Main Entry Point
==============================

Usage
-----
    python main.py                 # worked example at v = 0.5
    python main.py --sensitivity   # plus v sensitivity over the default grid
    python main.py --debug         # DEBUG console output

Steps
-----
1. Linguistic judgments -> triangular fuzzy numbers
2. Expert aggregation
3. Fuzzy best / worst values
4. Normalized fuzzy differences
5. Fuzzy S and R
6. Fuzzy Q
7. Defuzzification
8. Rankings
9. Compromise solution
"""

import sys


def main():
    """Run the worked example."""
    run_sensitivity = '--sensitivity' in sys.argv

    from fvikor import (
        get_default_config, set_config, setup_from_config, example_session,
        VSensitivityAnalysis, CalculationError,
    )

    config = get_default_config()
    if '--debug' in sys.argv:
        config.logging.level = "DEBUG"
    set_config(config)
    setup_from_config(config.logging)

    session = example_session(config)

    try:
        result = session.run()
    except CalculationError as e:
        print(f"\nCalculation failed: {e}")
        return 1

    print(result.summary())

    if run_sensitivity:
        analysis = VSensitivityAnalysis(config=config)
        print(analysis.analyze(session.inputs).summary())

    return 0


if __name__ == '__main__':
    sys.exit(main())
