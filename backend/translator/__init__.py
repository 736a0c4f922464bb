"""KanaDojo Translator — translation history store and trivia facts API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
