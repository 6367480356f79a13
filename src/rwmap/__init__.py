"""
rwmap - manpage URL rewrite-map generator.

Expands every manpage of a precomputed index into all URL aliases it can be
requested under, resolves each alias to one canonical serving path, and
writes the result as sharded ``<alias> <target>`` files for an exact-match
rewrite engine.

- rwmap.index: variants, narrowing, artifact loading
- rwmap.rewrite: alias table, disambiguation, per-name emission
- rwmap.execution: sharded concurrent writer
- rwmap.cli: ``rwmap`` command
"""

__version__ = "0.1.0"
