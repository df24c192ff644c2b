"""
Background services around the engine: observable state, event hooks
and the tick scheduler.
"""
