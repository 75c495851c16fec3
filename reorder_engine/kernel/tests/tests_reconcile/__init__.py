"""
Reconciliation Engine Test Suite

Test Files:
1. test_reconcile_scenarios.py - Worked examples for swap and shift
2. test_reconcile_guards.py - Shape mismatch, stale ids, no-op inputs
3. test_reconcile_properties.py - Permutation, non-disturbance, consistency
4. test_reconcile_plan.py - move_item, plan_reorder, moved_items
"""
