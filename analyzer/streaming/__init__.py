"""Server-sent event streaming of live analyses."""

from analyzer.streaming.channel import StreamChannel
from analyzer.streaming.emitter import AnalysisStreamEmitter, split_chunks

__all__ = ["AnalysisStreamEmitter", "StreamChannel", "split_chunks"]
