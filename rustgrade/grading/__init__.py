# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
rustgrade grading package.

Answers one question per exercise: does it compile, and do its tests pass?

Subsystems:
  - shape: deciding whether a root is standalone files or a cargo project
  - locator: finding the exercise files under a root
  - toolchain: launching rustc/cargo and capturing what they say
  - runner: the compile-then-run protocol for a single exercise
  - orchestrator: folding runner outcomes into a GradeResult
"""
