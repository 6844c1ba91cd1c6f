"""ViewModel package for UI state and command surfaces.

Call context:
    ``weatherlike/app/orchestrator.py`` composes these view models around one
    shared ``ViewStateVM`` per session.

Dependencies:
    Domain types and rules only. I/O adapters and async orchestration remain
    outside (``SettingsVM`` reads provider URL defaults, nothing more).

Responsibilities:
    - Hold the mutable session view state and notify listeners.
    - Apply screen-mode and layer transitions in event order.
    - Keep MVVM boundaries explicit by avoiding transport or persistence logic.
"""
