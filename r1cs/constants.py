# Order of the prime-order subgroup of Curve25519 (the Ristretto scalar field).
SCALAR_FIELD_ORDER = 2**252 + 27742317777372353535851937790883648493

# Field elements travel as fixed-width little-endian byte strings.
FIELD_ELEMENT_SIZE = 32
