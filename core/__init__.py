"""
Core utilities module for ContratoPronto
Contains helpers, file utilities, exceptions and services
"""
