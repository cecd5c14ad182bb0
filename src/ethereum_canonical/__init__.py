"""
Canonical Chain Model
^^^^^^^^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

The strongly-typed, binary representation of blocks, transactions and
receipts consumed by a local chain-processing engine. Every value in this
package is an immutable dataclass built from `ethereum_types` numerics and
fixed-size byte strings.

Only the derived computations the RPC translation layer relies on live here:
header hashing, transaction hashing, and sender recovery. Consensus rules,
state and execution are out of scope.
"""

__version__ = "0.1.0"
