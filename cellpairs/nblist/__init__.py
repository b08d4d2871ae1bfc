from .grid import VoxelGrid, VoxelMap
from .neighborlist import NeighborList, compute_neighbor_pairs
from .pairs import AtomPair, pairs_to_array, pairs_to_dataframe
