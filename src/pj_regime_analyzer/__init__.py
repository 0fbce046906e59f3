"""PJ Regime Analyzer - comparador de regimes tributários para pessoas jurídicas."""

__version__ = "0.1.0"
