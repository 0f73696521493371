"""
Application Layer

Contains the command router, the player guard and the ports they depend on.

Structure:
- commands/: Interaction requests, typed arguments and per-command handlers
- services/: Command routing and player guard
- interfaces/: Port interfaces for infrastructure adapters
"""
