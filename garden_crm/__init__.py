"""
Garden CRM API
"""
