"""
MedApp signup backend and registration client.

Provides the user/doctor/patient registration API and the client-side
registration flow that drives it.
"""
__version__ = "1.0.0"
