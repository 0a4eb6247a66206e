"""Release engine.

- version / policy: parse the requested version and gate pre-releases
- channels / identity: the closed set of promotions and per-addon rewrites
- manifest / bundle / imageset / transform: edits of the target tree
- changeset / publish / gitlab: branch, commit, push and review request
- service: orchestration of one run
"""

from __future__ import annotations
