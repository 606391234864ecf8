"""
Booster pack generation engine
"""
