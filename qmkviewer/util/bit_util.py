PRESSED_MASK = 0xFFFF_FFFF_FFFF_FFFF  # 64 keys at most


def pressed_indices(bits: int, num_keys: int = 64) -> list[int]:
    """ Indices of all set bits below num_keys, lowest first """
    return [i for i in range(min(num_keys, 64)) if (bits >> i) & 1]


def bits_from_indices(indices) -> int:
    """ Build a pressed-key bitmask from key indices, indices outside 0..63 are ignored """
    bits = 0
    for idx in indices:
        if 0 <= idx < 64:
            bits |= 1 << idx
    return bits


def toggle_bit(bits: int, index: int) -> int:
    if not 0 <= index < 64:
        return bits
    return (bits ^ (1 << index)) & PRESSED_MASK


def le_bytes_to_int(data: bytes, width: int) -> int:
    """
    Read the first width bytes as a little-endian unsigned integer.

    Args:
        data: At least width bytes.
        width: Number of bytes to use, missing bytes count as zero.

    Returns:
        The zero-extended integer value.
    """
    return int.from_bytes(bytes(data[:width]), 'little')


def format_bits(bits: int, digits: int = 12) -> str:
    """ Hex representation as shown in the debug panel, e.g. 0x00000000A55A """
    return f"0x{bits:0{digits}X}"
