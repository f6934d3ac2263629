"""hdlcraft - HDL generation for FPGA synthesis of digital circuit models."""

__version__ = "0.3.0"
