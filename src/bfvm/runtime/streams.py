from typing import BinaryIO


class ByteSource:
    def read(self) -> int | None:
        ''' Next byte, or None at end of stream '''
        raise NotImplementedError()


class ByteSink:
    def write(self, value: int):
        raise NotImplementedError()


class StreamSource(ByteSource):
    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def read(self) -> int | None:
        buf = self.stream.read(1)

        if not buf:
            return None

        return buf[0]


class StreamSink(ByteSink):
    def __init__(self, stream: BinaryIO):
        self.stream = stream

    def write(self, value: int):
        self.stream.write(bytes((value,)))
        # Whatever is written survives an abort later on
        self.stream.flush()


class BufferSource(ByteSource):
    def __init__(self, data: bytes = b''):
        self.data = data
        self.pos = 0

    def read(self) -> int | None:
        if self.pos >= len(self.data):
            return None

        value = self.data[self.pos]
        self.pos += 1
        return value


class BufferSink(ByteSink):
    def __init__(self):
        self.data = bytearray()

    def write(self, value: int):
        self.data.append(value)

    def getvalue(self) -> bytes:
        return bytes(self.data)
