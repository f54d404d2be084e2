r"""Math delimiter canonicalization and shorthand expansion.

Small, best-effort helpers that turn the many ways chat assistants write math
(``\[ \]``, ``\( \)``, ``$``, unicode shorthand) into one canonical form.
"""
