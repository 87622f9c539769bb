"""Snapshot storage layer.

This module installs extracted tzdata snapshots under the data root
and reports which version is active from the directories on disk.
"""
