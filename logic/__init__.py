"""logic — Per-tick game systems.

Each system is a plain function that takes a Field and mutates it.
``tick.tick_field`` runs them in the fixed order.

Modules
-------
waves           — wave scaling, archetype roll, spawn scheduler
movement        — enemy locomotion along the path
targeting       — in-range queries and target-mode selection
combat          — level-scaled tower stats, firing, tracers
economy         — build / upgrade / sell pricing and commands
tick            — per-frame system orchestrator
input_manager   — raw pygame input → intent mapping
"""
