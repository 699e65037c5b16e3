class ByteAccumulator:
    """Growable byte buffer, appended at the end and consumed from the front.

    The backing storage only grows, doubling from ``min_capacity``.
    Consuming bytes moves the remainder to offset 0 in place.
    """

    def __init__(self, min_capacity: int = 32):
        self.min_capacity = min_capacity
        self.data = bytearray()
        self.length = 0

    def __len__(self):
        return self.length

    def __bytes__(self):
        return bytes(self.data[: self.length])

    def __repr__(self):
        return f"{self.__class__.__name__}({bytes(self)!r}, capacity={self.capacity})"

    @property
    def capacity(self) -> int:
        return len(self.data)

    def view(self) -> memoryview:
        return memoryview(self.data)[: self.length]

    def find(self, sep: bytes, start: int = 0) -> int:
        return self.data.find(sep, start, self.length)

    def push(self, data: bytes):
        new_length = self.length + len(data)
        if new_length > self.capacity:
            cap = max(self.capacity, self.min_capacity)
            while cap < new_length:
                cap *= 2
            grown = bytearray(cap)
            grown[: self.length] = self.data[: self.length]
            self.data = grown
        self.data[self.length : new_length] = data
        self.length = new_length

    def pop_front(self, n: int):
        if not 0 <= n <= self.length:
            raise ValueError(f"cannot pop {n} bytes from {self.length}")
        if n == 0:
            return
        remain = self.length - n
        self.data[:remain] = self.data[n : self.length]
        self.length = remain

    def take(self, n: int) -> bytes:
        data = bytes(self.data[:n])
        self.pop_front(n)
        return data
