"""Interfaces/abstracciones del Core.

Por qué:
- El transporte es un contrato (Protocol) que implementan adaptadores concretos.
- El dispatcher recibe el transporte por constructor: en tests se inyecta un fake.
"""
