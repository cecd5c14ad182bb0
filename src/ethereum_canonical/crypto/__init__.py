"""
Cryptographic primitives used by the canonical chain model.
"""
