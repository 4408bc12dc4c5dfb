"""SDKProbe package.

Provides a diagnostic harness for backend-as-a-service SDKs, including:
- Configuration management
- Ordered diagnostic steps and their orchestration
- Verification providers (Firebase, Google Gemini)
- Console presentation components
- Infrastructure utilities
"""

__version__ = "1.0.0"
