# style.py
# Formats output bytes as hex text, two characters per byte, with optional
# strings before, after and between each pair.


class Style:
    def __init__(self, prefix=None, suffix=None, separator=None, lowercase=False):
        self.prefix = prefix        # Printed before each pair
        self.suffix = suffix        # Printed after each pair
        self.separator = separator  # Printed between successive pairs
        self.lowercase = lowercase

    def format(self, data, sink):
        """Write data to a text sink in this style, ending with a newline.

        Returns the number of bytes formatted.
        """
        pattern = '%02x' if self.lowercase else '%02X'
        count = 0
        for byte in data:
            if count and self.separator:
                sink.write(self.separator)
            if self.prefix:
                sink.write(self.prefix)
            sink.write(pattern % byte)
            if self.suffix:
                sink.write(self.suffix)
            count += 1
        sink.write('\n')
        return count
