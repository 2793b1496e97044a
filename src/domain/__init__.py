"""Domain layer - Rate limit rule model.

This layer contains the rule entity and its builder, value objects, the error
taxonomy and protocols (ports). The domain layer has NO dependencies on any
framework or infrastructure - it is pure Python.

Structure:
- entities/: RateLimitRule (immutable, has identity) and its builder
- value_objects/: RateLimitBand, propagation scopes
- enums/: LimitScope, OnLimitExceedPolicy
- errors/: Rule error taxonomy (Result failures, not exceptions)
- protocols/: Repository, change notifier and logger ports
"""
