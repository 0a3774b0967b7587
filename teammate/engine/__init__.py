"""Team formation search engine.

Sub-modules:
- team_balance   – per-team balance score and partition aggregate
- team_generator – one randomized round-robin partition
- optimizer      – best-of-N random-restart search
- dispatch       – collecting concurrent results, all-or-nothing
"""
