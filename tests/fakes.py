class FakeSummarizer:
    """Stands in for the Gemini title summarizer."""

    def __init__(self, title=None, error=None, wait_for=None):
        self.title = title
        self.error = error
        self.wait_for = wait_for
        self.calls = []

    def summarize(self, message):
        self.calls.append(message)
        if self.wait_for is not None:
            self.wait_for.wait(2)
        if self.error:
            raise self.error
        return self.title
