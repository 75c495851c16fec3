"""
Drag State Machine Test Suite

Test Files:
1. test_drag_transitions.py - One test per event/state pair that matters
2. test_drag_controller.py - Controller commits, confirmation gate, failures
"""
