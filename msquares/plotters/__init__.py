"""
msquares plotters.

Matplotlib rendering of tessellated mesh lists for quick inspection.
"""

from .matplotlib import MatplotlibMeshPlotter, plot_meshlist

__all__ = ['MatplotlibMeshPlotter', 'plot_meshlist']
