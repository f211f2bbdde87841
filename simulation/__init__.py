"""simulation — Fields, the session roster and the save format.

Every Field is a complete, isolated tower-defense run.  The session
manager ticks all of them every frame and routes player commands to
the one that is currently shown.

Submodules
----------
field       Field — one run: economy, waves, towers, enemies, status
sessions    SessionManager — fixed roster, active index, autosave
snapshot    Versioned JSON encode / forgiving decode of the roster
views       Frozen read-only views for renderers and HUDs
"""
