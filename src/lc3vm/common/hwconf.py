MEMORY_SIZE     = 1 << 16
WORD_SIZE       = 2                 # bytes per word in the backing store
WORD_BITS       = 16
WORD_MASK       = (1 << WORD_BITS) - 1
SIGN_BIT        = 1 << (WORD_BITS - 1)

TRAP_TABLE_BASE = 0x0000            # trap vectors index memory directly
PC_START        = 0x3000            # conventional user program origin

# Register file layout
GP_REGS         = 8
R_PC            = GP_REGS
R_COND          = GP_REGS + 1
REGISTER_COUNT  = GP_REGS + 2
R_LINK          = 7                 # return address for JSR/JSRR/TRAP

# Condition flags (same bit order as the n/z/p branch mask)
FL_POS          = 1 << 0
FL_ZRO          = 1 << 1
FL_NEG          = 1 << 2
