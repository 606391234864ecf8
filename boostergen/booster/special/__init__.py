"""
Generators for releases whose packs do not follow the baseline slot model
"""
