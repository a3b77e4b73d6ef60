"""PlotDesk management CLI"""
