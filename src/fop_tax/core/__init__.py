"""Core domain: models, rules, calculators and services."""
