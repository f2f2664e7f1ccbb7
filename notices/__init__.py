"""notices/ -- Notice records and the ownership rules around them.

Layer rule: notices/ imports from core/ and auth/ (for the credential store
used in owner expansion). It does NOT import from api/.
"""
