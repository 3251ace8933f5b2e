"""
User module - signup, the password/user factory, and role bookkeeping.
"""
