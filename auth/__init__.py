"""auth/ -- Authentication and authorization package for the notice board.

Layer rule: auth/ imports only stdlib, third-party libraries, and core/.
It does NOT import from api/ or notices/.
api/ imports from auth/, not the other way around.
"""
