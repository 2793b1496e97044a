"""Application layer - Use cases and orchestration.

Structure:
- services/: RuleService (mutations), RuleChangePublisher (notify after
  commit), DashboardService (counters)
- dtos/: Specs and results exchanged with the presentation layer
- errors/: Application error categories

The application layer orchestrates domain logic but contains no business rules.
"""
