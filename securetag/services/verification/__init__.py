"""
Verification Services
Evaluator, ledger and the orchestrating verification service
"""
