"""Update orchestration.

This module compares the installed tzdata version with the latest release,
installs newer releases, and hands off to the recompilation step.
"""
