TAPE_SIZE = 30000           # Number of cells
CELL_BITS = 8
CELL_MODULO = 1 << CELL_BITS

# Maps every byte to exactly one char and back
SOURCE_ENCODING = 'latin-1'
