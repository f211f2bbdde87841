"""scenes — pygame screens.  Only ``field_scene`` ships today."""
