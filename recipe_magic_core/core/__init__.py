"""
Interfaces genéricas del core.

Define los Protocols que desacoplan la lógica de recetas de:
- El backend de persistencia (Supabase / SQLAlchemy)
- La estrategia de parsing de la salida del webhook de IA
"""
