"""Core data structures and case tables."""
from .mesh import Mesh, MeshList, MeshBuilder
from .tables import CaseTables, get_case_tables

__all__ = [
    'Mesh',
    'MeshList',
    'MeshBuilder',
    'CaseTables',
    'get_case_tables'
]
