"""
Routery API: map, hero.
"""
