from .cues import ArcadeAudioSink, AudioCueListener, AudioSink, LoggingAudioSink, SoundCue

__all__ = ["ArcadeAudioSink", "AudioCueListener", "AudioSink", "LoggingAudioSink", "SoundCue"]
