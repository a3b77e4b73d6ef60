"""PlotDesk - plot listings backend"""
