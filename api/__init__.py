"""
API HTTP para recipe-magic.

Esta capa expone endpoints REST que usan el core interno (recipe_magic_core)
para autenticar usuarios, guardar recetas y generarlas con IA.

La API está diseñada para ser consumida por:
- UI web (dashboard de recetas)
- Scripts de automatización
"""
