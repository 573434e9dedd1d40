"""
Audio Splitter Service.

Entry point for the audio splitting service.
"""

from ddtrace import patch_all

patch_all()


def main():
    """Starts the worker."""
    # Deferred so tracing is patched in before clients are created.
    from audio_splitter.dependencies import get_worker

    worker = get_worker()
    worker.start()


if __name__ == "__main__":
    main()
