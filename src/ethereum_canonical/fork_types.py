"""
Ethereum Types
^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Fixed-size byte types re-used throughout the canonical model.
"""

from ethereum_types.bytes import Bytes20, Bytes256

from .crypto.hash import Hash32

Address = Bytes20
Root = Hash32
Bloom = Bytes256
VersionedHash = Hash32
