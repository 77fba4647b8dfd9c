import pytest

from loxvm.chunk import Chunk, OpCode


def test_opcode_order_matches_instruction_set():
    chunk = Chunk()
    for op in OpCode:
        chunk.write(op, 1)
    assert list(chunk.code) == list(range(14))
    assert [OpCode(byte).name for byte in chunk.code] == [
        "CONSTANT", "NIL", "TRUE", "FALSE", "EQUAL", "GREATER", "LESS",
        "NEGATE", "RETURN", "ADD", "SUBTRACT", "MULTIPLY", "DIVIDE", "NOT",
    ]


def test_new_chunk_is_empty():
    chunk = Chunk()
    assert len(chunk) == 0
    assert chunk.constants == []


def test_write_records_bytes_and_lines():
    chunk = Chunk()
    chunk.write(OpCode.NIL, 1)
    chunk.write(OpCode.RETURN, 2)
    assert bytes(chunk.code) == bytes([OpCode.NIL, OpCode.RETURN])
    assert chunk.lines == [1, 2]
    assert len(chunk) == 2


def test_lines_stay_parallel_to_code():
    chunk = Chunk()
    for i in range(40):
        chunk.write(i % 256, i // 3)
    assert len(chunk.lines) == len(chunk.code) == 40
    assert chunk.lines[-1] == 39 // 3


def test_add_constant_returns_sequential_indices():
    chunk = Chunk()
    first = chunk.add_constant(1.5)
    second = chunk.add_constant(None)
    assert (first, second) == (0, 1)
    assert chunk.constants[first] == 1.5
    assert chunk.constants[second] is None


@pytest.mark.parametrize("byte", [-1, 256])
def test_write_rejects_out_of_range_bytes(byte):
    chunk = Chunk()
    with pytest.raises(ValueError):
        chunk.write(byte, 1)
    assert len(chunk) == 0