# Opcode selectors (bits 15-12)
BR   = 0x0  # if (n & N) | (z & Z) | (p & P): PC + off9 -> PC
ADD  = 0x1  # R1 + R2 / R1 + imm5 -> DR
LD   = 0x2  # M[PC + off9] -> DR
ST   = 0x3  # SR -> M[PC + off9]
JSR  = 0x4  # PC -> R7; PC + off11 / BaseR -> PC
AND  = 0x5  # R1 & R2 / R1 & imm5 -> DR
LDR  = 0x6  # M[BaseR + off6] -> DR
STR  = 0x7  # SR -> M[BaseR + off6]
RTI  = 0x8  # unused
NOT  = 0x9  # ~SR -> DR
LDI  = 0xA  # M[M[PC + off9]] -> DR
STI  = 0xB  # SR -> M[M[PC + off9]]
JMP  = 0xC  # BaseR -> PC (RET when BaseR is R7)
RES  = 0xD  # reserved
LEA  = 0xE  # PC + off9 -> DR
TRAP = 0xF  # PC -> R7; M[trapvect8] -> PC

# Well-known trap vectors
TRAP_GETC  = 0x20
TRAP_OUT   = 0x21
TRAP_PUTS  = 0x22
TRAP_IN    = 0x23
TRAP_PUTSP = 0x24
TRAP_HALT  = 0x25

MNEMONICS = {
    BR: 'BR',
    ADD: 'ADD',
    LD: 'LD',
    ST: 'ST',
    JSR: 'JSR',
    AND: 'AND',
    LDR: 'LDR',
    STR: 'STR',
    RTI: 'RTI',
    NOT: 'NOT',
    LDI: 'LDI',
    STI: 'STI',
    JMP: 'JMP',
    RES: 'RES',
    LEA: 'LEA',
    TRAP: 'TRAP'
}
