"""
Enigma -- Three-Rotor Cipher Machine Simulator
===============================================

Simulates an electromechanical rotor cipher machine: three stepping
rotors, a fixed reflector and a plugboard composed into a reciprocal
letter substitution.

Modules:
    - enigma.core.engine: Machine orchestrator
    - enigma.core.models: Pydantic data models
    - enigma.core.alphabet, wiring, rotor, reflector, plugboard, stepping:
      the individual machine components
    - enigma.output: Console display
    - enigma.cli: Click-based command-line interface
"""

__version__ = "1.0.0"
__tool_name__ = "enigma"
