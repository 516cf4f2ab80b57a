"""Media Platform — content-publishing backend with domain-invariant enforcement.

Invariants:
    - Dependency arrows point inward: api -> services -> repositories -> core
    - core/ never imports from any other layer

Design Decisions:
    - Functional core, imperative shell: pure rule checks in core/,
      async store orchestration in services/ (ADR: testable invariants)
"""
